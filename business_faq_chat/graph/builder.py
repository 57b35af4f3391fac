from langgraph.graph import END, StateGraph

# Importing the nodes:
from business_faq_chat.graph.nodes import (
    fallback_node,
    generate_node,
    retrieve_node,
    review_node,
    route_after_step,
)

# Importing the state defined
from business_faq_chat.graph.state import GraphState


def build_graph():
    graph = StateGraph(GraphState)

    graph.add_node("retrieve", retrieve_node)
    graph.add_node("generate", generate_node)
    graph.add_node("review", review_node)
    graph.add_node("fallback", fallback_node)

    # every query starts with retrieval
    graph.set_entry_point("retrieve")

    graph.add_conditional_edges(
        "retrieve",
        route_after_step,
        {"continue": "generate", "fallback": "fallback"},
    )
    graph.add_conditional_edges(
        "generate",
        route_after_step,
        {"continue": "review", "fallback": "fallback"},
    )

    graph.add_edge("review", END)
    graph.add_edge("fallback", END)

    return graph.compile()
