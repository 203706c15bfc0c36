"""
Command line interface for ResumeFlow.

Subcommands:

* ``rank`` – rank a PDF résumé against a role/field or a job description
  (pasted text or a posting URL, which is fetched first).
* ``fetch-jd`` – print the job description extracted from a URL.
* ``roast`` – print a humorous critique as JSON, optionally saving it as MP3.
* ``speak`` – synthesise arbitrary text to an MP3 file.

The CLI stands in for a UI: it validates the input file, encodes it and
prints results as JSON or plain text.  The flows themselves live in
:mod:`resumeflow.flows`.
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from .config import Settings, load_settings
from .errors import ConfigError, ResumeFlowError
from .flows.fetch_job import fetch_job_description
from .flows.rank_resume import RankResumeInput, rank_resume_flow
from .flows.roast_resume import RoastResumeInput, roast_resume_flow
from .genai.client import GenAIClient
from .genai.speech import SpeechSynthesizer

logger = logging.getLogger("resumeflow.cli")

EXIT_NO_JOB_DESCRIPTION = 2
PDF_MAGIC = b"%PDF"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_pdf_base64(path: str) -> str:
    """Read a PDF and return it base64 encoded.

    Raises:
        ResumeFlowError: If the file is missing or is not a PDF.
    """
    pdf_path = Path(path)
    if not pdf_path.is_file():
        raise ResumeFlowError(f"Résumé file not found: {path}")
    data = pdf_path.read_bytes()
    if pdf_path.suffix.lower() != ".pdf" or not data.startswith(PDF_MAGIC):
        raise ResumeFlowError(f"Invalid file type for {path}: please provide a PDF résumé")
    return base64.b64encode(data).decode("ascii")


def _resolve_log_level(name: str) -> str:
    level = name.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level '{name}'; expected one of {', '.join(LOG_LEVELS)}")
    return level


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def _write_audio(audio_base64: str, out_path: str) -> None:
    with open(out_path, "wb") as f:
        f.write(base64.b64decode(audio_base64))
    logger.info("Audio written to %s", out_path)


def _build_client(settings: Settings) -> GenAIClient:
    return GenAIClient.from_settings(settings)


def _build_speech(settings: Settings) -> SpeechSynthesizer:
    return SpeechSynthesizer.from_settings(settings)


async def cmd_rank(args: argparse.Namespace, settings: Settings) -> int:
    """Rank a résumé and print the result as JSON.

    With ``--jd`` the role and field default to placeholder labels and the
    comparison is made against the job description.  A URL is fetched
    first; if nothing usable comes back the command exits with code 2.
    """
    pdf_base64 = _load_pdf_base64(args.file)
    client = _build_client(settings)
    job_description: Optional[str] = None
    job_role = args.role or "Candidate"
    field = args.field or "General"
    if args.jd:
        jd_input = args.jd.strip()
        job_role = args.role or "Job Description Match"
        field = args.field or "N/A"
        if _is_url(jd_input):
            logger.info("Fetching job description from %s", jd_input)
            fetched = await fetch_job_description(client, jd_input)
            if not fetched.found:
                logger.error(
                    "Could not extract a job description from %s (%s); paste the text instead",
                    jd_input,
                    fetched.miss_reason.value if fetched.miss_reason else "unknown",
                )
                return EXIT_NO_JOB_DESCRIPTION
            job_description = fetched.text
        else:
            job_description = jd_input
    elif not (args.role and args.field):
        logger.error("Provide either --jd or both --role and --field")
        return EXIT_NO_JOB_DESCRIPTION

    result = await rank_resume_flow(
        client,
        RankResumeInput(
            pdf_base64=pdf_base64,
            job_role=job_role,
            field=field,
            job_description=job_description,
        ),
    )
    output = json.dumps(result.to_payload(), indent=2)
    if args.out:
        Path(args.out).write_text(output + "\n", encoding="utf-8")
        logger.info("Ranking written to %s", args.out)
    else:
        print(output)
    return 0


async def cmd_fetch_jd(args: argparse.Namespace, settings: Settings) -> int:
    """Print the job description behind a URL."""
    result = await fetch_job_description(_build_client(settings), args.url)
    if not result.found:
        logger.error("No job description extracted (%s)", result.miss_reason.value if result.miss_reason else "unknown")
        return EXIT_NO_JOB_DESCRIPTION
    print(result.text)
    return 0


async def cmd_roast(args: argparse.Namespace, settings: Settings) -> int:
    """Print the roast as JSON and optionally save the narration."""
    pdf_base64 = _load_pdf_base64(args.file)
    speech = _build_speech(settings) if args.audio_out else None
    result = await roast_resume_flow(
        _build_client(settings),
        RoastResumeInput(
            pdf_base64=pdf_base64,
            job_role=args.role or "Target Role",
            field=args.field or "General",
            speak=bool(args.audio_out),
        ),
        speech=speech,
    )
    print(json.dumps(result.to_payload(), indent=2))
    if args.audio_out:
        if result.audio:
            _write_audio(result.audio, args.audio_out)
        else:
            logger.warning("No audio produced; %s not written", args.audio_out)
    return 0


async def cmd_speak(args: argparse.Namespace, settings: Settings) -> int:
    """Synthesise text to an MP3 file."""
    result = await _build_speech(settings).synthesize(args.text)
    if not result.audio:
        logger.error("Text-to-Speech returned no audio")
        return 1
    _write_audio(result.audio, args.out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resumeflow", description="ResumeFlow CLI")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default from config)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Rank
    rank_cmd = subparsers.add_parser("rank", help="Rank a résumé against a role or job description")
    rank_cmd.add_argument("--file", required=True, help="Path to the PDF résumé")
    rank_cmd.add_argument("--role", help="Target job role, e.g. 'Backend Engineer'")
    rank_cmd.add_argument("--field", help="Target field or industry, e.g. 'Fintech'")
    rank_cmd.add_argument("--jd", help="Job description text or job posting URL")
    rank_cmd.add_argument("--out", help="Write the JSON result here instead of stdout")
    rank_cmd.set_defaults(func=cmd_rank)

    # Fetch job description
    fetch_cmd = subparsers.add_parser("fetch-jd", help="Extract a job description from a URL")
    fetch_cmd.add_argument("--url", required=True, help="Job posting URL")
    fetch_cmd.set_defaults(func=cmd_fetch_jd)

    # Roast
    roast_cmd = subparsers.add_parser("roast", help="Roast a résumé")
    roast_cmd.add_argument("--file", required=True, help="Path to the PDF résumé")
    roast_cmd.add_argument("--role", help="Target job role (default: Target Role)")
    roast_cmd.add_argument("--field", help="Target field or industry (default: General)")
    roast_cmd.add_argument("--audio-out", dest="audio_out", help="Also save the roast as MP3 here")
    roast_cmd.set_defaults(func=cmd_roast)

    # Speak
    speak_cmd = subparsers.add_parser("speak", help="Synthesise text to MP3")
    speak_cmd.add_argument("--text", required=True, help="Text to read aloud")
    speak_cmd.add_argument("--out", required=True, help="Output MP3 path")
    speak_cmd.set_defaults(func=cmd_speak)
    return parser


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
        logging.basicConfig(
            level=_resolve_log_level(args.log_level or settings.log_level),
            format="[%(levelname)s] %(message)s",
        )
        return asyncio.run(args.func(args, settings))
    except ResumeFlowError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
