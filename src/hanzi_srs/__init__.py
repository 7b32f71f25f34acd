"""hanzi-srs: spaced-repetition vocabulary practice."""

from hanzi_srs.consts import VERSION

__version__ = VERSION
