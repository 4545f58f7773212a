"""
Todo subsystem.

Components:
- models.py: data structures (Todo, Priority)
- store.py: SQLite-backed storage (the server side of the API)
- view.py: filter/search/sort + aggregate counts over the client-held list
- state.py: client-held list state and its reducer
"""
