from langchain_core.prompts import ChatPromptTemplate

# -------------------------------------------------
# Fixed phrases the assistant is told to use
# -------------------------------------------------
DECLINE_PHRASE = (
    "I don't have enough information about that in our documentation. "
    "Would you like me to connect you with a human agent who can provide more detailed assistance?"
)

REDIRECT_PHRASE = (
    "I'm here to help with questions about our business. "
    "Is there something specific about our products or services I can help you with?"
)

# -------------------------------------------------
# Fixed replies applied after the model call
# -------------------------------------------------
EMPTY_RESPONSE_MESSAGE = (
    "I apologize, but I'm having trouble processing your request right now. "
    "Would you like me to connect you with a human agent for assistance?"
)

HANDOFF_SUFFIX = (
    " If you need more specific information, I can connect you with a human agent "
    "who can provide detailed assistance."
)

CREDENTIAL_ERROR_MESSAGE = (
    "It seems there's an issue with the API configuration. "
    "Please check your API key and try again, or contact support for assistance."
)

TECHNICAL_DIFFICULTY_MESSAGE = (
    "I apologize, but I'm experiencing technical difficulties right now. "
    "Would you like me to connect you with a human agent who can help you immediately?"
)

# Replies containing any of these are treated as low confidence
UNCERTAINTY_MARKERS = (
    "I don't know",
    "I'm not sure",
    "I don't have information",
    "I cannot find",
    "unclear",
    "uncertain",
)

HANDOFF_MARKER = "human agent"


# -------------------------------------------------
# System instructions
# -------------------------------------------------
BUSINESS_ASSISTANT_INSTRUCTION = f"""You are a helpful business assistant AI. You help customers with their questions about the business.

IMPORTANT INSTRUCTIONS:
1. If you have relevant context from business documents or website content, use it to provide accurate, helpful answers
2. If you don't have enough information to answer confidently, say "{DECLINE_PHRASE}"
3. Be professional, friendly, and concise
4. If the question is about something completely unrelated to business (like personal advice, jokes, etc.), politely redirect: "{REDIRECT_PHRASE}"
5. Never make up or hallucinate information that isn't in the provided context"""

CONTEXT_LEAD_IN = (
    "\n\nYou have access to the following business context from documents and website content. "
    "Use this information to answer the user's question:\n\n"
)

SENTIMENT_INSTRUCTION = """You are a sentiment analysis expert.
Analyze the sentiment of the text and provide a rating from 1 to 5 stars and a confidence score between 0 and 1.
1 star = very negative, 2 stars = negative, 3 stars = neutral, 4 stars = positive, 5 stars = very positive."""

KEY_TOPICS_INSTRUCTION = (
    "Extract the main topics and themes from the given text. "
    "Each topic is a short string. Limit to maximum 10 topics."
)

SUMMARY_INSTRUCTION = (
    "Please provide a concise summary of the following text, "
    "focusing on the key points and main ideas:"
)

SUMMARY_EMPTY_MESSAGE = "Unable to generate summary"
SUMMARY_FAILED_MESSAGE = "Unable to generate summary due to technical issues"

CREDENTIAL_CHECK_PROMPT = (
    "Hello, this is a test message. Please respond with 'API key is working'."
)


def build_system_instruction(context: str) -> str:
    """Append retrieved context to the fixed instruction when there is any."""
    if context and context.strip():
        return BUSINESS_ASSISTANT_INSTRUCTION + CONTEXT_LEAD_IN + context
    return BUSINESS_ASSISTANT_INSTRUCTION


# -------------------------------------------------
# Chat prompt (system instruction + user turn)
# -------------------------------------------------
chat_prompt = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_instruction}"),
        ("human", "{input}"),
    ]
)

PROMPT_REGISTRY = {
    "chat": chat_prompt,
}
