class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    ASK = V1 + "/ask"
    RESUMES = V1 + "/resumes"
    RESUME = RESUMES + "/{resume_id}"
    JOBS = V1 + "/jobs"
    JOB = JOBS + "/{job_id}"
    JOB_MATCH = JOB + "/match"


REDACTED = "[REDACTED]"
ADDRESS_REDACTED = "[ADDRESS REDACTED]"
ELLIPSIS = "..."
UNKNOWN_CANDIDATE = "Unknown"
