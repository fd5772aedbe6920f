"""Run the CV Pipeline API from project root. Use: python run_app.py"""
from cv_intake.app import main

main()
