"""AI Leadership Growth Benchmark service.

Scores executive self-assessments, drives the multi-step assessment flows,
rates partner portfolio companies for advisory fit, and enriches results with
LLM-generated insights that degrade to fixed content when the provider fails.
"""

__version__ = "0.1.0"
