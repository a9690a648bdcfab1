"""
Daily check-in ingestion service.

FastAPI application package: check-in pipeline, session auth and routers.
"""
