"""Core domain logic: conversation assembly, prompts, and exceptions."""
