"""
Training pipeline: builds features from the configured dataset, fits the
Naive Bayes model and writes the model, vocabulary and metrics.
"""
