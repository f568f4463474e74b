from optima_core.http.client import TracedClient, create_traced_client, merge_trace_headers, traced_fetch

__all__ = ["TracedClient", "create_traced_client", "merge_trace_headers", "traced_fetch"]
