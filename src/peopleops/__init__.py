"""PeopleOps HRIS package.

Organized by feature modules (auth, roles, attendance, leaves, profiles, ...)
with a thin Flask controller layer over service/repository layers.
"""
