from jobscope.text.normalizer import TextNormalizer

__all__ = ["TextNormalizer"]
