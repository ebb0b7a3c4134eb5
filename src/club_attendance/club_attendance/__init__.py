"""Club attendance reconciliation package.

Feature modules (members, attendance, status_updates, reports, daily_task)
each keep a plain data model, a repository interface and a MySQL
implementation; the daily_task module seeds pending rows once per day.
"""
