"""NiceGUI interface - thin presentation layer for the biogas assistant.

Responsibilities:
    - Landing screen with typed, spoken or suggested questions
    - Chat screen with streamed replies from the relay endpoint
    - Voice capture through the browser's speech recognizer

Holds only transient session state. All model calls go through the relay API.
"""
