"""
Errors shared by the API services and the Streamlit frontend.

Kept free of provider imports so the frontend can raise and catch them
without pulling in the OpenAI SDK.
"""


class FileReadError(Exception):
    pass


class GenerationError(Exception):
    pass


class ChatError(Exception):
    pass
