"""Attendly package.

Feature modules (employees, attendance, leave, overtime, payroll,
registration) each ship a model, a repository and a service, with a thin
Flask controller on top. Persistence goes through a record store
(memory, JSON file or MySQL) selected at wiring time.
"""
