"""
Component relay package.

Provides:
- An HTTP relay that turns a component request into a Gemini prompt
- Output cleanup that strips markdown code fences from generated code
"""
