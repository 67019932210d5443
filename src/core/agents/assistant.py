from typing import Annotated, Optional, TypedDict
from langchain_openai import ChatOpenAI
from langgraph.graph import StateGraph, START, END
from langgraph.graph.message import add_messages
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langchain_core.messages import SystemMessage, BaseMessage


SYSTEM_PROMPT = """You are a helpful assistant inside a chat console.
Users ask about their product, users, or data. Answer concisely and
break larger problems down into clear steps.
"""


class AgentState(TypedDict):
    messages: Annotated[list[BaseMessage], add_messages]


def build_llm(model: str, temperature: float = 0):
    return ChatOpenAI(
        model=model,
        temperature=temperature,
        streaming=True,
    )


def chatbot_factory(llm):
    async def chatbot(state: AgentState):
        msgs = [SystemMessage(SYSTEM_PROMPT), *state["messages"]]
        ai_msg = await llm.ainvoke(msgs)
        return {'messages': [ai_msg]}
    return chatbot


def build_agent(
    model: str,
    temperature: float = 0,
    checkpointer: Optional[BaseCheckpointSaver] = None,
):
    """
    Single-node chat graph. Pass a shared checkpointer to keep one history
    across agents built for different models.
    """
    chatbot = chatbot_factory(build_llm(model, temperature))

    graph_builder = StateGraph(AgentState)
    graph_builder.add_node('chatbot', chatbot)
    graph_builder.add_edge(START, 'chatbot')
    graph_builder.add_edge('chatbot', END)

    return graph_builder.compile(
        name="console_assistant",
        checkpointer=checkpointer if checkpointer is not None else MemorySaver(),
    )
