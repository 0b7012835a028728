# models_registry.py
from typing import Tuple

from ..config import KNN_K_GRID, KNN_K_GRID_FAST
from .knn import create_knn_factory
from .lda import create_lda_factory
from .naive_bayes import create_nb_factory
from .qda import create_qda_factory

MODEL_NAMES = ("nb", "qda", "lda", "knn")


def get_factory_and_grid(model: str, fast: bool = True) -> Tuple:
    """
    Return (factory, param_grid). factory: params(dict) -> estimator
    param_grid: List[dict]; the generative models have closed-form fits, so
    their grid holds the single default setting.
    """
    model = model.lower()

    if model in {"nb", "naive_bayes", "naivebayes"}:
        return create_nb_factory(), [{"reg": 0.0}]

    if model in {"qda"}:
        return create_qda_factory(), [{"reg": 0.0}]

    if model in {"lda"}:
        return create_lda_factory(), [{"reg": 0.0}]

    if model in {"knn", "nn"}:
        ks = KNN_K_GRID_FAST if fast else KNN_K_GRID
        return create_knn_factory(), [{"k": k} for k in ks]

    raise ValueError(f"Unknown model: {model}")
