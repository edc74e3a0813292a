"""QA verifier: signs and publishes Binary Authorization attestations."""

__version__ = "0.1.0"
