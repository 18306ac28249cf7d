# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Role(str, Enum):
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class EmbeddingBackend(str, Enum):
    GEMINI = "gemini"
    SENTENCE_TRANSFORMERS = "sentence_transformers"
    LOCAL = "local"


class ResumeExtractorBackend(str, Enum):
    GEMINI = "gemini"
    RULES = "rules"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    VALIDATION_FAILED = ErrorInfo("Validation failed", status.HTTP_400_BAD_REQUEST)
    QUERY_REQUIRED = ErrorInfo("Query is required", status.HTTP_400_BAD_REQUEST)
    INVALID_RESULT_SIZE = ErrorInfo(
        "Result size must be a positive integer", status.HTTP_400_BAD_REQUEST
    )
    FORBIDDEN = ErrorInfo("Recruiter access required", status.HTTP_403_FORBIDDEN)
    JOB_NOT_FOUND = ErrorInfo("Job not found", status.HTTP_404_NOT_FOUND)
    RESUME_NOT_FOUND = ErrorInfo("Resume not found", status.HTTP_404_NOT_FOUND)
    INTERNAL_ERROR = ErrorInfo(
        "Internal Error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
