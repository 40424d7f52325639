from prd_creator.models.metric import Metric
from prd_creator.models.template import Template, TemplateVersion
from prd_creator.models.validation_rule import ValidationRule

__all__ = ["Metric", "Template", "TemplateVersion", "ValidationRule"]
