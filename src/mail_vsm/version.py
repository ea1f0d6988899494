"""
Version constants for the vector space model classifier.

Every component that influences vector geometry carries its own version so a
model artifact can be matched with the code that produced it.
"""

from .models.pipeline_version import PipelineVersion
from .vsm.stopwords import STOPLIST_VERSION
from .vsm.tokenizer import TOKENIZER_VERSION
from .vsm.vectorizer import VECTORIZER_VERSION

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
ARTIFACT_FORMAT_VERSION = "vsm-artifact-1"
LEARNER_VERSION = "ema-centroid-1.0.0"


def get_current_pipeline_version() -> PipelineVersion:
    """
    Get current pipeline version configuration.

    Returns:
        PipelineVersion instance with current versions
    """
    return PipelineVersion(
        tokenizer_version=TOKENIZER_VERSION,
        stoplist_version=STOPLIST_VERSION,
        vectorizer_version=VECTORIZER_VERSION,
        artifact_format_version=ARTIFACT_FORMAT_VERSION,
        learner_version=LEARNER_VERSION,
    )
