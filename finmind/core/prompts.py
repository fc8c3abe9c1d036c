"""
Chat prompts.

System persona, the knowledge-grounded question template and the message
assembly used by the chat orchestrator.

Message order: [system, (human, ai) per history turn, final human message].

Dependencies: langchain_core.prompts, langchain_core.messages
System role: Prompt templates for the streaming chat pipeline
"""

from collections.abc import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder, PromptTemplate

from finmind.models.conversation import ConversationTurn
from finmind.models.search import RankedCandidate

SYSTEM_PROMPT = """You are 'ZUEL-FinMind', a professional finance AI assistant built by students of Zhongnan University of Economics and Law (ZUEL).

## Principles
1. Focus on finance, economics, programming and data analysis questions
2. Politely decline unrelated lifestyle topics and steer the user back to finance
3. Keep answers short and precise; support claims with data where possible
4. Reply in the language the user writes in"""

KNOWLEDGE_PROMPT = PromptTemplate.from_template(
    """Reference material:
{context}

Answer the question below. Prefer the reference material when it is relevant.
If the question is unrelated to the material or is casual conversation, ignore
the material and answer from general knowledge.

Question: {question}"""
)

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{input}"),
])


def format_context(candidates: Sequence[RankedCandidate]) -> str:
    """Render ranked chunks as a numbered reference list."""
    return "\n\n".join(f"[{i}] {candidate.text}" for i, candidate in enumerate(candidates, start=1))


def history_to_messages(history: Sequence[ConversationTurn]) -> list[BaseMessage]:
    """Expand turns (oldest first) into alternating human/ai messages."""
    messages: list[BaseMessage] = []
    for turn in history:
        messages.append(HumanMessage(content=turn.question))
        messages.append(AIMessage(content=turn.answer))
    return messages


def build_final_question(question: str, candidates: Sequence[RankedCandidate]) -> str:
    """Raw question in free-conversation mode, template-wrapped when context exists."""
    if not candidates:
        return question
    return KNOWLEDGE_PROMPT.format(context=format_context(candidates), question=question)


def build_messages(
    history: Sequence[ConversationTurn],
    question: str,
    candidates: Sequence[RankedCandidate],
) -> list[BaseMessage]:
    """
    Assemble the ordered prompt.

    Args:
        history: Recent turns, oldest first
        question: Current user question
        candidates: Reranked context (empty for free-conversation mode)

    Returns:
        list[BaseMessage]: [system, ...history, final user message]
    """
    return CHAT_PROMPT.format_messages(
        history=history_to_messages(history),
        input=build_final_question(question, candidates),
    )
