"""
Prompt composer — the two prompts sent to the model.

Stage 1 asks a general model to turn the request into a short plain-
English plan.  Stage 2 hands that plan to a code model and pins down the
output convention the file-block parser relies on:

    ```file: relative/path
    <content>
    ```
"""

from __future__ import annotations

from crudgen.core.models.request import GenerationRequest

FENCE = "```"
MARKER = "file:"


def build_interpretation_prompt(request: GenerationRequest) -> str:
    """Prompt asking the model for a structured plan of the project."""
    return f"""\
Given the following natural language request:

"{request.summary()}"

Output a structured plan describing:
- Required project structure (e.g., folders/files)
- Technologies/frameworks involved (e.g., Flask, Express)
- Entities/models (e.g., User, Product)
Respond in plain English for another model to understand. Be concise and clear."""


def build_generation_prompt(request: GenerationRequest, spec: str) -> str:
    """Prompt asking the model to emit every project file as a fenced block."""
    return f"""\
You are a code generator. Based on the following structured spec, \
generate a complete {request.language} CRUD API project using {request.database}.

{spec}

Respond ONLY with file outputs in this format:
{FENCE}{MARKER} relative/path/to/file
<file content>
{FENCE}

Start every block with the line "{MARKER} <path>" directly after the opening fence.
Repeat for every file. Use paths relative to the project root.
Do not add any explanation outside the blocks."""
