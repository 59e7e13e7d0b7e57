"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskKind)
- task_index.py: tick-bucketed index of pending tasks
- task_scheduler.py: polling dispatcher + public scheduling API
- task_queue.py: chains of delays/loops at cumulative offsets
"""
