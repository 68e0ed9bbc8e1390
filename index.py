"""
Vercel entrypoint for the FastAPI application
This file is required by Vercel to find the FastAPI app instance
"""
from agroguide.main import app

__all__ = ["app"]
