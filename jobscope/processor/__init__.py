from jobscope.processor.processor import ResumeProcessor, build_processor

__all__ = ["ResumeProcessor", "build_processor"]
