"""
User-facing flows.

* `rank_resume` – Score a résumé against a role or job description.
* `fetch_job` – Pull a job description off a posting URL.
* `roast_resume` – Humorous critique, optionally narrated.
"""

from .fetch_job import (  # noqa: F401
    JobDescriptionFetch,
    MissReason,
    fetch_job_description,
    fetch_job_description_from_url,
)
from .rank_resume import RankResumeInput, rank_resume_flow  # noqa: F401
from .roast_resume import RoastResumeInput, roast_resume_flow  # noqa: F401
from .schemas import RankingResult, RoastResult  # noqa: F401
