from typing import Any, List, Literal, Optional, TypedDict


class GraphState(TypedDict, total=False):
    session_id: str
    input: str
    credential: Optional[str]
    generator: Any
    relevant: List[Any]
    context: str
    raw_response: Optional[str]
    failure: Optional[Literal["retrieval", "credential", "provider"]]
    output: str
    steps: List[str]
