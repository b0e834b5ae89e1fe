from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "smartnote_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "smartnote_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_IMPORTED_TOTAL = get_or_create_metric(
    "smartnote_tasks_imported_total", "Tasks created from AI drafts", Counter
)

TASK_IMPORT_FAILURES_TOTAL = get_or_create_metric(
    "smartnote_task_import_failures_total", "AI drafts that failed to import", Counter
)

ENTITIES_AUTO_CREATED_TOTAL = get_or_create_metric(
    "smartnote_entities_auto_created_total",
    "Projects and categories created by the importer",
    Counter,
    labelnames=["kind"],
)

UPSTREAM_ERRORS_TOTAL = get_or_create_metric(
    "smartnote_upstream_errors_total", "Failed calls to the AI analysis service", Counter
)
