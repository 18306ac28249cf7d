# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "resumeradar"

RESUMES: Final[str] = f"{ROOT}:resumes"
RESUME_INDEX: Final[str] = f"{RESUMES}:index"  # set of resume ids
JOBS: Final[str] = f"{ROOT}:jobs"
JOB_INDEX: Final[str] = f"{JOBS}:index"  # set of job ids
