"""
Portfolio Composition Engine
The student dashboard's portfolio builder as an in-memory service.

Architecture:
- Portfolio document: typed, reorderable content blocks (single writer)
- Generation workflow: single-flight "AI" content synthesis
- Assistant: rule-based mentor chat over live state
- Search: live filter over projects, jobs and skills
"""

__version__ = "1.0.0"
__author__ = "Student"
