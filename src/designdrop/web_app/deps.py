"""Зависимости FastAPI."""

from __future__ import annotations

from fastapi import Request

from ..pipeline import SubmissionPipeline
from ..submission_log import SubmissionLog


def get_pipeline(request: Request) -> SubmissionPipeline:
    return request.app.state.pipeline


def get_submission_log(request: Request) -> SubmissionLog:
    return request.app.state.pipeline.submission_log
