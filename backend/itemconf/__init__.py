"""itemconf — declarative validation of monitoring item configuration.

Rule providers describe, per item type and lifecycle context, how each
field must be validated. The validation engine applies those rules to
submitted records and the message collector gathers the outcome of one
request unit for rendering.

Embedding applications configure logging once at start-up:

    from itemconf.logging_config import configure_logging

    configure_logging()
"""

__version__ = "1.0.0"
