"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter) and wire mapping
- task_client.py: async HTTP client for the remote task API
- task_list.py: pure reconciliation/filter helpers over the local collection
"""
