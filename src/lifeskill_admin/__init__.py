"""Life-skill school administration backend.

This package is organized by feature modules (schools, students, visits, ...)
with a thin Flask controller layer over service and repository layers.
"""
