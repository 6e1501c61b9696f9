"""
FastAPI Study Planner backend package.

Serves the weekday/weekend study schedule, topics, categories and the daily
checklist. Build the app with `src.planner.main.create_app`, or run
`python -m src.planner.main` to serve it with uvicorn.
"""
