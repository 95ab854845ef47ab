from .utils import json_body, page_args, request_payload
from .stats import percentage, count_by, status_counts, top_performers
from .scoring import system_health, compliance_metrics
