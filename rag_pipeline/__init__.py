"""
rag_pipeline — Context assembly and LLM answer generation.

Components:
  context_builder — renders matched providers + knowledge into one prompt block
  llm_engine      — OpenAI-compatible chat-completion client with fixed prompt
"""
