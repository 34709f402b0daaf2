"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskList, TaskFormat) and store errors
- task_store.py: flat-file storage (read / save / parse / dump)
"""
