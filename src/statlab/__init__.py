"""
Text mining of tweet sources and generative classifiers, as worked through in
an introductory data-science course.

Key modules:
- prepare_dataset: tweet loader and campaign filter, labeled-table loader
- core.tokenizer: tweet-aware tokenizer
- core.aggregation: token x category counts
- core.association: corrected odds ratio and log-odds confidence interval
- core.sentiment: sentiment-lexicon association
- core.metrics / core.cross_validation: evaluation helpers
- models: Naive Bayes, QDA, LDA and kNN
- experiments: tweet-source pipeline and classifier comparison
"""

__version__ = "0.1.0"
