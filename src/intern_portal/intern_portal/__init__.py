"""Internship Intake Portal package.

Feature modules (applications, attendance, scanning, documents, ...) sit on
top of a small key-value store, with a thin Flask controller layer over
plain service classes.
"""
