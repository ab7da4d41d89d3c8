from .settings import ClassifierConfig

__all__ = ['ClassifierConfig']
