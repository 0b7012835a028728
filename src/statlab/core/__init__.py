# Core components for the text-mining and classifier analyses

from .aggregation import TokenCounts, column_totals, count_frame, count_tokens, counts_frame
from .association import (
    AssociationRecord,
    LogOddsInterval,
    association_frame,
    log_odds_interval,
    log_odds_se,
    odds_ratio,
    odds_ratio_table,
    score_counts,
)
from .cross_validation import grid_search_cv, stratified_kfold_indices
from .metrics import (
    accuracy_score,
    balanced_accuracy_score,
    compute_all_metrics,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    specificity_score,
)
from .sentiment import Lexicon, label_counts, label_words, load_lexicon, score_labels
from .tokenizer import Tokenizer, load_stop_words, tag_tokens

__all__ = [
    "TokenCounts",
    "column_totals",
    "count_frame",
    "count_tokens",
    "counts_frame",
    "AssociationRecord",
    "LogOddsInterval",
    "association_frame",
    "log_odds_interval",
    "log_odds_se",
    "odds_ratio",
    "odds_ratio_table",
    "score_counts",
    "grid_search_cv",
    "stratified_kfold_indices",
    "accuracy_score",
    "balanced_accuracy_score",
    "compute_all_metrics",
    "confusion_matrix",
    "f1_score",
    "precision_score",
    "recall_score",
    "specificity_score",
    "Lexicon",
    "label_counts",
    "label_words",
    "load_lexicon",
    "score_labels",
    "Tokenizer",
    "load_stop_words",
    "tag_tokens",
]
