"""
ResumeFlow package.

This package ranks and critiques résumés with a hosted generative model
(Gemini on Vertex AI).  All semantic judgement is delegated to the
model; the code here assembles prompts, issues requests and enforces the
shape of what comes back.

The high‑level layout is:

1. **genai** – Thin wrappers around the Gemini and Text-to-Speech SDKs.
   ``content`` turns loosely shaped prompts into typed parts, ``client``
   issues plain, grounded and structured generation requests and
   ``speech`` synthesises MP3 audio.
2. **prompts** – Markdown prompt templates shipped with the package and
   a small ``{{placeholder}}`` loader.
3. **flows** – The user-facing operations: rank a résumé against a role
   or job description, fetch a job description from a URL and roast a
   résumé.
4. **cli** – Command line entry point wiring the flows together.
"""

__version__ = "0.1.0"
