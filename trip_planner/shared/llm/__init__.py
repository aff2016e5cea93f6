from trip_planner.shared.llm.client import call_llm, create_client, extract_json_from_response

__all__ = ["call_llm", "create_client", "extract_json_from_response"]
