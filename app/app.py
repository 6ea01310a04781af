"""
UI layer
Purpose: Streamlit-only glue. Renders the chat, collects typed or spoken input,
and delegates all work to the controller. Keeps UI concerns (layout/state
widgets) separate from the relay logic so that logic can be unit tested
without Streamlit.
"""

import streamlit as st
import structlog
from audio_recorder_streamlit import audio_recorder

from pizza_ai.config import load_settings
from pizza_ai.controller import PizzaOrderController
from pizza_ai.models import Role
from pizza_ai.services.llm_openai import OpenAILLMClient
from pizza_ai.services.pricing import CHAT_MODELS, session_cost
from pizza_ai.utils.logging import setup_logging


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Pizza AI",
    page_icon="🍕",
    layout="centered",
)

# ---------------------------
# UI constants
# ---------------------------
ROLE_LABELS = {
    Role.USER: "🧑 User",
    Role.ASSISTANT: "🤖 Pizza AI",
}
ROLE_AVATARS = {
    Role.USER: "🧑",
    Role.ASSISTANT: "🤖",
}

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
if "settings" not in st_session:
    st_session.settings = load_settings()
    setup_logging(st_session.settings.log_level, st_session.settings.log_format)
st_session.setdefault("controller", None)
st_session.setdefault("api_key_set", False)
st_session.setdefault("model", st_session.settings.llm.model)
st_session.setdefault("voice_mode", False)

logger = structlog.get_logger()


# ---------------------------
# Helpers
# ---------------------------
def get_ready_controller():
    """Return the session controller, or None before the API key is set."""
    return st_session.get("controller")


def init_controller(api_key: str) -> None:
    """Create the OpenAI client + controller once per session."""
    try:
        llm = OpenAILLMClient(api_key=api_key)
    except RuntimeError as e:
        st.error(f"OpenAI client init failed: {e}")
        st.stop()
    st_session.controller = PizzaOrderController(llm, st_session.settings)
    st_session.api_key_set = True
    logger.info("session_started", model=st_session.model)


def render_message(role: Role, content: str) -> None:
    with st.chat_message(role.value, avatar=ROLE_AVATARS[role]):
        st.markdown(f"**{ROLE_LABELS[role]}:** {content}")


def reset_session() -> None:
    """Start a new order: wipe the conversation, keep API key and model."""
    controller = get_ready_controller()
    if controller:
        controller.reset()
    logger.info("session_reset")


def run_turn(controller: PizzaOrderController, user_text: str) -> None:
    """Append the user's message and stream the assistant reply below it."""
    try:
        stream = controller.submit(user_text)
    except ValueError as e:
        st.toast(str(e), icon="⚠️")
        return

    render_message(Role.USER, controller.get_history()[-1].content)
    try:
        with st.chat_message(Role.ASSISTANT.value, avatar=ROLE_AVATARS[Role.ASSISTANT]):
            with st.spinner("Pizza AI is typing…"):
                first = next(stream, None)
            if first is not None:
                st.write_stream(_chain(first, stream))
    except Exception as e:
        logger.error("chat_turn_failed", error=str(e))
        st.toast(f"Chat flow failed: {e}", icon="⚠️")
        return
    st.rerun()


def _chain(first: str, rest):
    yield first
    yield from rest


# ---------------------------
# SIDEBAR: settings & usage
# ---------------------------
with st.sidebar:
    st.markdown("# Settings")

    api_key = st_session.settings.openai_api_key
    if not api_key:
        st.markdown("## OPEN AI API Key Required")
        api_key = st.text_input(
            "Enter your API key",
            type="password",
            help="We do not store your key. It stays in your session only.",
        )
    if not api_key:
        st.warning("Please enter your API key in the sidebar to continue.")
        st.stop()
    if not st_session.api_key_set:
        init_controller(api_key)

    st_session.model = st.selectbox(
        "Model",
        CHAT_MODELS,
        index=(
            CHAT_MODELS.index(st_session.model)
            if st_session.model in CHAT_MODELS
            else 0
        ),
    )
    st_session.settings.llm.model = st_session.model

    st.divider()
    st.markdown("## Session")
    if st.button("🧾 New order", width="stretch"):
        reset_session()
        st.rerun()

    controller = get_ready_controller()
    if controller:
        usage = controller.usage
        cost = session_cost(usage, st_session.model)
        c1, c2 = st.columns(2)
        c1.metric("Tokens in", usage.tokens_in)
        c2.metric("Tokens out", usage.tokens_out)
        st.caption(f"Estimated cost: **${cost:.4f}**")


# ---------------------------
# MAIN: chat
# ---------------------------
st.markdown("#### Pizza Order Taker AI Chatbot 🤖🍕")
st.caption(
    "Pizza AI is an AI chatbot that helps you order just like talking to a "
    "real person in a store."
)
st.divider()

controller = get_ready_controller()

for msg in controller.get_history():
    render_message(Role(msg.role), msg.content)

st_session.voice_mode = st.toggle("🎙️ Voice mode", value=st_session.voice_mode)

user_text = None
if st_session.voice_mode:
    st.caption("Click the microphone, speak your order, then pause to send.")
    wav_bytes = audio_recorder(
        pause_threshold=2,
        sample_rate=16_000,
        text="Press to record",
        icon_size="2x",
    )
    blob = controller.capture_audio(wav_bytes) if wav_bytes else None
    if blob is not None:
        with st.spinner("Transcribing…"):
            result = controller.voice_to_text(blob)
        if result.ok:
            user_text = result.text
        else:
            st.toast(result.text, icon="⚠️")

typed = st.chat_input("Talk to Pizza AI ...")
if typed is not None:
    user_text = typed

if user_text is not None:
    run_turn(controller, user_text)
