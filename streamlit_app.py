"""
Pixel Studio — interactive editor

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io

import numpy as np
import streamlit as st
from PIL import Image

from pixel_studio.config import StudioConfig
from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import PixelGrid
from pixel_studio.history import History
from pixel_studio.image_io import upscale_image
from pixel_studio.operations import OPERATIONS, apply_operation
from pixel_studio.patterns import PATTERNS
from pixel_studio.script import ScriptRunner, dump_script, parse_script

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Pixel Studio",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded",
)

_DEFAULTS = StudioConfig()

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .studio-title {
        font-size: 2.2rem;
        font-weight: 300;
        letter-spacing: 0.06em;
        text-align: center;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.5rem;
        margin-bottom: 1.5rem;
    }
    .stButton > button {
        background-color: #1a1a1a;
        color: #faf9f6;
        border-radius: 0;
        letter-spacing: 0.08em;
    }
    .catalogue-detail {
        text-align: center;
        font-size: 0.8rem;
        color: #6a6a6a;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

# -- Session state -----------------------------------------------------
if "history" not in st.session_state:
    st.session_state.history = History()
if "rng" not in st.session_state:
    st.session_state.rng = np.random.default_rng(_DEFAULTS.seed)

history: History = st.session_state.history


def _report(exc: InvalidArgument) -> None:
    st.error(str(exc))


st.markdown('<div class="studio-title">Pixel Studio</div>', unsafe_allow_html=True)

# -- Sidebar: sources --------------------------------------------------
with st.sidebar:
    st.subheader("Open")
    uploaded = st.file_uploader(
        "Image", type=[ext.lstrip(".") for ext in sorted(_DEFAULTS.SUPPORTED_EXTENSIONS)],
    )
    if uploaded is not None and st.button("LOAD", use_container_width=True):
        img = Image.open(io.BytesIO(uploaded.getvalue()))
        history.reset(PixelGrid.from_image(img))

    st.subheader("Generate")
    pattern = st.selectbox("Pattern", list(PATTERNS))
    if pattern == "checkerboard":
        size = st.number_input("Square size", min_value=1, value=16)
        params: tuple = (int(size),)
    else:
        height = st.number_input("Height", min_value=1, value=90)
        width = st.number_input("Width", min_value=1, value=135)
        params = (int(height), int(width))
        if pattern == "rainbowFlag":
            direction = st.radio("Stripes", ["h", "v"], horizontal=True)
            params = (*params, direction)
    if st.button("GENERATE", use_container_width=True):
        try:
            history.push(PATTERNS[pattern](*params))
        except InvalidArgument as exc:
            _report(exc)

    st.subheader("Script")
    script = st.text_area("Batch script", height=160, placeholder="generate checkerboard 8\nblur")
    run_col, save_col = st.columns(2)
    if run_col.button("EXECUTE", use_container_width=True) and script.strip():
        try:
            ScriptRunner(history=history, rng=st.session_state.rng).run(script)
        except InvalidArgument as exc:
            _report(exc)
    # Valid scripts are saved one command per line, anything else verbatim.
    try:
        script_text = dump_script(parse_script(script))
    except InvalidArgument:
        script_text = script
    save_col.download_button(
        "SAVE SCRIPT",
        data=script_text,
        file_name="script.txt",
        mime="text/plain",
        disabled=not script.strip(),
        use_container_width=True,
    )

# -- Edit controls -----------------------------------------------------
if not history:
    st.markdown(
        '<div class="catalogue-detail">Load an image, generate a pattern or run a script.</div>',
        unsafe_allow_html=True,
    )
    st.stop()

op_cols = st.columns(len(OPERATIONS))
seeds = st.slider("Mosaic seeds", 1, 5000, _DEFAULTS.mosaic_seeds)
for col, operation in zip(op_cols, OPERATIONS, strict=False):
    if col.button(operation.upper(), use_container_width=True):
        try:
            history.push(
                apply_operation(history.current, operation, seeds, st.session_state.rng),
            )
        except InvalidArgument as exc:
            _report(exc)

undo_col, redo_col, _ = st.columns([1, 1, 4])
if undo_col.button("UNDO", disabled=not history.can_undo, use_container_width=True):
    history.undo()
if redo_col.button("REDO", disabled=not history.can_redo, use_container_width=True):
    history.redo()

# -- Canvas ------------------------------------------------------------
grid = history.current
upscale = st.slider("Zoom", 1, 12, max(1, 600 // max(grid.width, grid.height)))
display = upscale_image(grid, upscale)
st.image(display)
st.markdown(
    f'<div class="catalogue-detail">{grid.width} &times; {grid.height}, '
    f"{len(history)} step(s) in history</div>",
    unsafe_allow_html=True,
)

buf = io.BytesIO()
display.save(buf, format="PNG")
st.download_button(
    "SAVE IMAGE",
    data=buf.getvalue(),
    file_name="pixel_studio.png",
    mime="image/png",
)
