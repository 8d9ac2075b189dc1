"""Prompt templates for LLM calls."""

WRAPPED_SYSTEM_PROMPT = "You are a witty analyst writing a year-in-review of someone's terminal habits."

WRAPPED_PROMPT = """Analyze the following shell data and generate a summary with insights and quotes in the following JSON format:

{{
  "sections": [
    {{
      "title": "Section Title",
      "description": "Section description.",
      "quotes": ["Quote1", "Quote2"]
    }}
  ]
}}

Respond with the JSON object only.

Shell data:
{corpus}
"""
