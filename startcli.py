"""Run the ResumeFlow CLI from a source checkout.

Equivalent to the installed ``resumeflow`` command, e.g.::

    python startcli.py rank --file resume.pdf --jd https://jobs.example.com/42
    python startcli.py roast --file resume.pdf --role "Data Analyst" --audio-out roast.mp3

Vertex AI credentials and the project id come from the environment
(``GOOGLE_CLOUD_PROJECT_ID``) or a ``--config`` YAML file.
"""
from __future__ import annotations

import sys

from resumeflow.cli import main


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
