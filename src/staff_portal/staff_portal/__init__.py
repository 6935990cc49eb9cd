"""Staff Portal package.

Organized by feature module (users, time entries, time off, ...) with a thin
Flask controller layer over service/repository layers.
"""
