"""Orders API migration assistant: knowledge base, analyzer, generator, reports."""
