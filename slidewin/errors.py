class SlideWindowError(Exception):
    pass


# window larger than the image, stride <= 0, scale ratio <= 1, scale cap < 1
class InvalidConfiguration(SlideWindowError, ValueError):
    pass


class ResampleFailure(SlideWindowError, RuntimeError):
    pass


# extractor returned nothing for a window
class FeatureExtractionError(SlideWindowError, TypeError):
    pass
