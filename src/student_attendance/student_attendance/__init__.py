"""Student Attendance package.

This package is organized by feature modules (classes, students, attendance)
with a thin Flask controller layer over service/repository layers.
"""
