# routes.py
from fastapi import FastAPI
from controller.ask_controller import ask_router
from controller.job_controller import job_router
from controller.resume_controller import resume_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(ask_router)
    app.include_router(resume_router)
    app.include_router(job_router)
