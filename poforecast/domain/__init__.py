"""Domain layer: models, repository interfaces and pure forecasting services."""
