"""Library retrieval: keywords, candidate retrieval, ranking and context assembly.

The pipeline mirrors a small retrieval-augmented prompt builder:
1. Extract keywords from the latest user message
2. Query stories, prompts and tools concurrently
3. Score and keep the top records per collection
4. Render them (with IDs) into the system instruction
"""
