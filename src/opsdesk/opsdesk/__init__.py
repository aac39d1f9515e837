"""opsdesk package.

Attendance, leave and payroll core of the internal operations app,
organized by feature modules (permissions, attendance, leave, ...) with a
thin Flask controller layer over service/repository layers.
"""
