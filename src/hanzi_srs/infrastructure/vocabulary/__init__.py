# Infrastructure Vocabulary Adapters Package
from .static import StaticVocabulary
from .yaml_vocabulary import DEFAULT_VOCABULARY_PATH, YamlVocabulary

__all__ = ["StaticVocabulary", "YamlVocabulary", "DEFAULT_VOCABULARY_PATH"]
