"""Resume analysis and mock-interview practice backed by a generative-language model."""

__version__ = "0.1.0"
