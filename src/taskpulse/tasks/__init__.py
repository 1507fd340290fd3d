"""
Task subsystem.

Components:
- task_models.py: data structures (Task, FetchSuccess, FetchFailure)
- data_fetcher.py: simulated remote fetch reporting to a weakly-held observer
- task_store.py: task collection, fetch observer, persistence, lifecycle hooks
- stopwatch.py: seconds counter persisted across lifecycle changes
- roster.py: sample Student and Coordinate values with custom equality and order
"""
