"""
Streamlit frontend for the AI Video Studio.

This is the main entry point for the application. It handles the UI and orchestrates
the workflow between the Blueprint Requester (Gemini), image generation and
template rendering (Creatomate).

Environment Variables:
- GEMINI_API_KEY (or GOOGLE_GENAI_API_KEY): Required for Gemini calls
- CREATOMATE_API_KEY: Required for image generation and rendering
- GEMINI_MODEL: (Optional) Gemini model to use (default: gemini-2.5-flash)
- GEMINI_THINK_BUDGET: (Optional) Thinking budget for Gemini (in tokens)
- CREATOMATE_TEMPLATE_ID: (Optional) Render template to fill
- IMAGE_PACING_SECONDS / RENDER_WAIT_SECONDS / HTTP_TIMEOUT_SECONDS: (Optional) timing
"""

import json
from dataclasses import replace

import streamlit as st

from video_studio.config import PLACEHOLDER_PROGRESS, load_config
from video_studio.pipeline import check_config, refresh_render, run_create_video, run_preview
from video_studio.status import FINAL_URL_KEY, LOADING_KEY, PREVIEW_KEY, RENDER_JOB_KEY, StatusReporter
from video_studio.templates import resolve_template

ACTION_KEY = "pending_action"

# ---------- Streamlit Page Configuration ----------
st.set_page_config(
    page_title="AI Video Studio",
    page_icon="🎬",
    layout="centered"
)


@st.cache_resource
def _startup_config():
    """Read .env and the environment once per server process."""
    return load_config()


def _queue_action(action: str) -> None:
    # Runs before the rerun renders, so buttons below come out disabled.
    if action == "preview" and not st.session_state.get("prompt", "").strip():
        st.session_state["prompt_missing"] = True
        return
    st.session_state[ACTION_KEY] = action
    st.session_state[LOADING_KEY] = True


reporter = StatusReporter(st.session_state)
base_config = _startup_config()

action = st.session_state.pop(ACTION_KEY, None)
if action is None and reporter.is_loading:
    # A previous run was interrupted mid-step; nothing is in flight now.
    st.session_state[LOADING_KEY] = False

# ---------- Main UI ----------
st.title("🎬 AI Video Studio")
st.markdown("_Describe any topic and let AI write the script, create every image and produce the video_")

# ---------- Sidebar: Environment Configuration ----------
with st.sidebar:
    st.markdown("**API Keys & Settings**")
    gemini_key = st.text_input(
        "Gemini API Key",
        type="password",
        value=base_config.gemini_api_key,
        help="Your API key from Google AI Studio (ai.google.dev)"
    )
    creatomate_key = st.text_input(
        "Creatomate API Key",
        type="password",
        value=base_config.creatomate_api_key,
        help="Used for image generation and video rendering"
    )
    gemini_model = st.text_input("Gemini Model", value=base_config.gemini_model)

    with st.expander("🔧 Advanced: Template & Timing", expanded=False):
        template_id = st.text_input("Creatomate Template ID", value=base_config.template_id)
        image_pacing = st.number_input(
            "Pause between image requests (s)",
            min_value=0.0,
            value=float(base_config.image_pacing_seconds),
            step=0.5,
        )
        render_wait = st.number_input(
            "Wait after render submission (s)",
            min_value=0.0,
            value=float(base_config.render_wait_seconds),
            step=1.0,
            help="The render is not polled; the video link is shown after this delay"
        )

config = replace(
    base_config,
    gemini_api_key=gemini_key.strip(),
    creatomate_api_key=creatomate_key.strip(),
    gemini_model=gemini_model.strip() or base_config.gemini_model,
    template_id=template_id.strip() or base_config.template_id,
    image_pacing_seconds=image_pacing,
    render_wait_seconds=render_wait,
)

with st.sidebar:
    template = resolve_template(config)
    st.caption(f"✅ Template: {template.label}")
    if not config.missing_keys():
        st.caption("✅ API keys configured")

# Report missing keys once per session, never block the UI.
if "config_checked" not in st.session_state:
    st.session_state["config_checked"] = True
    check_config(config, reporter)

# ---------- Section 1: Prompt ----------
st.header("1️⃣ Describe Your Video")
st.text_area(
    "Video topic",
    key="prompt",
    height=100,
    placeholder="e.g. The history of the car, from the first automobile in 1886 to modern electric vehicles...",
    disabled=reporter.is_loading,
)
st.button(
    "⏳ Generating..." if action == "preview" else "📝 Generate Preview",
    type="primary",
    width="stretch",
    disabled=reporter.is_loading,
    on_click=_queue_action,
    args=("preview",),
)
if st.session_state.pop("prompt_missing", False):
    st.warning("⚠️ Please enter a prompt first.")

if action == "preview":
    with st.status("Generating preview...", expanded=True) as status_box:
        reporter.writer = status_box
        preview = run_preview(st.session_state["prompt"], config, reporter)
        reporter.writer = None
        if preview is not None:
            status_box.update(label="✅ Preview ready", state="complete")
        else:
            status_box.update(label="❌ Preview failed", state="error")
    st.rerun()

# ---------- Status ----------
if reporter.status:
    with st.container(border=True):
        if reporter.is_loading:
            st.markdown(f"⏳ **{reporter.status}**")
            st.progress(PLACEHOLDER_PROGRESS)
        else:
            st.markdown(f"**{reporter.status}**")

# ---------- Section 2: Preview ----------
preview = st.session_state.get(PREVIEW_KEY)
if preview is not None and not st.session_state.get(FINAL_URL_KEY):
    st.header("2️⃣ Preview")
    cols = st.columns(3)
    for index, image_url in enumerate(preview.generated_images):
        with cols[index % 3]:
            st.image(image_url, caption=f"{index + 1}", width="stretch")
    st.code(json.dumps(preview.text_modifications, indent=2, ensure_ascii=False), language="json")

    st.button(
        "⏳ Rendering..." if action == "render" else "🎥 Create Video",
        width="stretch",
        disabled=reporter.is_loading,
        on_click=_queue_action,
        args=("render",),
    )
    if action == "render":
        with st.status("Rendering video...", expanded=True) as status_box:
            reporter.writer = status_box
            job = run_create_video(config, reporter)
            reporter.writer = None
            if job is not None:
                status_box.update(label="✅ Video complete", state="complete")
            else:
                status_box.update(label="❌ Render failed", state="error")
        st.rerun()

# ---------- Section 3: Final Video ----------
final_url = st.session_state.get(FINAL_URL_KEY)
if final_url:
    st.header("3️⃣ Your Video")
    st.success("Rendering finished! Your video is ready.")
    st.video(final_url)
    st.link_button("Open or download the video", final_url, width="stretch")

if st.session_state.get(RENDER_JOB_KEY) is not None:
    if st.button("🔄 Check render status", disabled=reporter.is_loading):
        refresh_render(config, reporter)
        st.rerun()

st.caption("Built with Streamlit + Google Gemini AI + Creatomate. Set your API keys in the sidebar to get started.")
