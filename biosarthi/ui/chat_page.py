"""NiceGUI landing and chat screens with voice input and streamed replies."""

import os

from nicegui import events, ui

from biosarthi.ui.client import stream_chat_response
from biosarthi.ui.session import (
    SILENCE_TIMEOUT,
    SUGGESTION_INTERVAL,
    ChatSession,
    SuggestionRotator,
    VoiceCapture,
)

ASSISTANT_NAME = "BioSarthi"

CUSTOM_CSS = """
<style>
    body { background: linear-gradient(135deg, #f0fdf4 0%, #eff6ff 100%); min-height: 100vh; }
    .message-user { background: #16a34a; color: white; border-radius: 8px 8px 0 8px; }
    .message-assistant { background: #e5e7eb; color: #1f2937; border-radius: 8px 8px 8px 0; }
    .title-gradient {
        background: linear-gradient(90deg, #dc2626, #16a34a);
        -webkit-background-clip: text;
        color: transparent;
    }
</style>
"""

# Bridges the browser's speech recognizer to Python via emitEvent
SPEECH_JS = """
<script>
window.biosarthiSpeech = (() => {
    const Recognition = window.SpeechRecognition || window.webkitSpeechRecognition;
    if (!Recognition) return null;
    const recognizer = new Recognition();
    recognizer.continuous = true;
    recognizer.interimResults = true;
    recognizer.onresult = (event) => {
        const transcript = Array.from(event.results)
            .map((result) => result[0].transcript)
            .join("");
        emitEvent("speech_result", transcript);
    };
    recognizer.onend = () => emitEvent("speech_end");
    return recognizer;
})();
</script>
"""


def _event_text(e: events.GenericEventArguments) -> str:
    if isinstance(e.args, str):
        return e.args
    if isinstance(e.args, list) and e.args:
        return str(e.args[0])
    return ""


@ui.page("/")
def chat_page() -> None:
    """Landing screen that turns into the chat screen once a question is asked."""
    ui.add_head_html(CUSTOM_CSS)
    ui.add_body_html(SPEECH_JS)

    session = ChatSession()
    voice = VoiceCapture(silence_timeout=SILENCE_TIMEOUT)
    suggestions = SuggestionRotator()
    on_landing = True

    landing_view: ui.column
    chat_view: ui.row
    landing_input: ui.input
    speak_label: ui.label
    suggestions_row: ui.row
    messages_container: ui.column
    chat_input: ui.input
    mic_btn: ui.button
    send_btn: ui.button

    # === Voice ===

    def start_recognizer() -> None:
        ui.run_javascript("window.biosarthiSpeech && window.biosarthiSpeech.start()")

    def stop_recognizer() -> None:
        ui.run_javascript("window.biosarthiSpeech && window.biosarthiSpeech.stop()")

    def refresh_voice_controls() -> None:
        speak_label.set_text("Listening..." if voice.listening else "Speak your question")
        mic_btn.props(f"color={'red' if voice.listening else 'green'}")

    def on_speech_result(e: events.GenericEventArguments) -> None:
        voice.on_result(_event_text(e))
        (landing_input if on_landing else chat_input).set_value(voice.transcript)

    def on_speech_end(_: events.GenericEventArguments) -> None:
        voice.on_end()
        refresh_voice_controls()

    ui.on("speech_result", on_speech_result)
    ui.on("speech_end", on_speech_end)

    async def stop_landing_capture() -> None:
        stop_recognizer()
        text = voice.stop()
        refresh_voice_controls()
        if text.strip():
            await open_chat(text)

    async def on_speak_click() -> None:
        if voice.listening:
            await stop_landing_capture()
        elif voice.start():
            voice.clear()
            start_recognizer()
            refresh_voice_controls()

    async def check_silence() -> None:
        if on_landing and voice.silence_expired():
            await stop_landing_capture()

    def on_mic_click() -> None:
        if voice.toggle():
            voice.clear()
            start_recognizer()
        else:
            stop_recognizer()
        refresh_voice_controls()

    # === Conversation ===

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[80%] p-3 gap-1 {bubble}"):
                ui.label("You" if is_user else ASSISTANT_NAME).classes(
                    "text-sm font-medium"
                )
                ui.label(msg["content"]).classes("whitespace-pre-wrap")
                ui.label(msg["time"]).classes("text-[10px] opacity-60 self-end")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in session.messages:
                render_message(msg)

    async def send(text: str) -> None:
        text = text.strip()
        if not text:
            return
        token = session.begin_response()
        if token is None:
            return

        chat_input.set_value("")
        send_btn.disable()
        session.add_message("user", text)
        refresh_messages()

        with messages_container:
            with ui.row().classes("w-full justify-start"):
                with ui.column().classes("max-w-[80%] p-3 gap-1 message-assistant"):
                    ui.label(ASSISTANT_NAME).classes("text-sm font-medium")
                    response_label = ui.label("...").classes(
                        "whitespace-pre-wrap italic text-gray-500"
                    )

        accumulated = ""

        def on_chunk(content: str) -> None:
            nonlocal accumulated
            if not session.is_current(token):
                return
            if not accumulated:
                response_label.classes(remove="italic text-gray-500")
            accumulated += content
            response_label.set_text(accumulated)

        def on_complete() -> None:
            if not session.finish_response(token, accumulated):
                return
            send_btn.enable()
            refresh_messages()

        def on_error(error: str) -> None:
            if not session.fail_response(token, error):
                return
            send_btn.enable()
            refresh_messages()
            ui.notify(error, type="negative")

        await stream_chat_response(session.history(), on_chunk, on_complete, on_error)

    # === Screens ===

    async def open_chat(initial_message: str) -> None:
        nonlocal on_landing
        on_landing = False
        voice.silence_timeout = None
        voice.clear()
        session.reset()
        refresh_messages()
        landing_view.set_visibility(False)
        chat_view.set_visibility(True)
        await send(initial_message)

    def back_to_landing() -> None:
        nonlocal on_landing
        if voice.listening:
            stop_recognizer()
            voice.stop()
        on_landing = True
        voice.silence_timeout = SILENCE_TIMEOUT
        voice.clear()
        session.reset()
        landing_input.set_value("")
        send_btn.enable()
        chat_input.set_value("")
        refresh_voice_controls()
        chat_view.set_visibility(False)
        landing_view.set_visibility(True)

    async def on_landing_enter() -> None:
        if landing_input.value and landing_input.value.strip():
            await open_chat(landing_input.value)

    def refresh_suggestions() -> None:
        suggestions_row.clear()
        with suggestions_row:
            for suggestion in suggestions.rotate():
                ui.button(
                    suggestion, on_click=lambda s=suggestion: open_chat(s)
                ).props("outline color=green no-caps")

    # === UI Layout ===
    with ui.column().classes(
        "w-full min-h-screen items-center justify-center gap-4"
    ) as landing_view:
        ui.label(ASSISTANT_NAME).classes("text-xl font-semibold")
        ui.label("Your Gateway to Biogas Innovation").classes(
            "text-4xl font-bold title-gradient"
        )
        with ui.column().classes("w-full max-w-md gap-2"):
            landing_input = (
                ui.input(placeholder="Ask me anything about Biogas...")
                .props("outlined")
                .classes("w-full")
                .on("keydown.enter", on_landing_enter)
            )
            with ui.button(on_click=on_speak_click).props("color=green").classes(
                "w-full h-12"
            ):
                ui.icon("mic").classes("mr-2")
                speak_label = ui.label("Speak your question")
        ui.label("Try asking about:").classes("text-xl font-semibold text-gray-700 mt-8")
        suggestions_row = ui.row().classes("justify-center gap-3")

    with ui.row().classes("w-full h-screen no-wrap gap-0") as chat_view:
        with ui.column().classes("w-[30%] h-full bg-white p-6 shadow-lg justify-center"):
            ui.label(f"{ASSISTANT_NAME}: Your Biogas Expert").classes(
                "text-3xl font-extrabold text-green-600"
            )
            ui.label(
                "Explore the world of biogas with BioSarthi. Ask questions, get "
                "insights, and learn about sustainable energy solutions that can "
                "transform our future."
            ).classes("text-gray-700")
        with ui.column().classes("w-[70%] h-full gap-0"):
            with ui.row().classes("w-full p-4 border-b"):
                ui.button("Back to Home", icon="arrow_back", on_click=back_to_landing).props(
                    "flat"
                )
            with ui.scroll_area().classes("flex-grow w-full"):
                messages_container = ui.column().classes("w-full p-6 gap-4")
            with ui.row().classes("w-full p-4 gap-2 items-center border-t bg-white no-wrap"):
                chat_input = (
                    ui.input(placeholder="Type your message...")
                    .props("outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", lambda: send(chat_input.value or ""))
                )
                mic_btn = ui.button(icon="mic", on_click=on_mic_click).props("color=green")
                send_btn = ui.button(
                    icon="send", on_click=lambda: send(chat_input.value or "")
                ).props("color=green")
    chat_view.set_visibility(False)

    refresh_suggestions()
    ui.timer(SUGGESTION_INTERVAL, refresh_suggestions)
    ui.timer(0.5, check_silence)


def main() -> None:
    ui.run(title="BioSarthi", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
