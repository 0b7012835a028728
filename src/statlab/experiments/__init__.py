# Experiment pipelines

from .classifier_comparison import ClassifierComparison
from .tweet_sources import TweetSourcePipeline

__all__ = [
    "ClassifierComparison",
    "TweetSourcePipeline",
]
