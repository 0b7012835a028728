# Classifier implementations

from .generative import GaussianGenerativeClassifier
from .knn import KNNClassifier, create_knn_factory
from .lda import LDA, create_lda_factory
from .naive_bayes import GaussianNaiveBayes, create_nb_factory
from .qda import QDA, create_qda_factory

__all__ = [
    "GaussianGenerativeClassifier",
    "GaussianNaiveBayes",
    "create_nb_factory",
    "QDA",
    "create_qda_factory",
    "LDA",
    "create_lda_factory",
    "KNNClassifier",
    "create_knn_factory",
]
