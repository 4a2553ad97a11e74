"""
Core business logic for disc golf score insights.

This module is framework-agnostic - it doesn't import FastAPI or any
LLM SDK. This separation means we can test the prompt logic in
isolation and swap providers if needed.
"""
