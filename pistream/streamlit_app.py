import os
import sys

import streamlit as st

_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from pistream.config import DEFAULT_OUTPUT, parse_digit_count
from pistream.pipeline import compute_pi_to_file
from pistream.verify import check_output_format, preview, verify_output


def _style():
    st.markdown(
        """
        <style>
        :root {--brand:#0ea5e9;--bg0:#0b132b;--bg1:#16213e;--fg:#e5e7eb}
        .stApp {background: radial-gradient(60% 80% at 20% 10%, rgba(14,165,233,.15), transparent 40%), linear-gradient(180deg, var(--bg0), var(--bg1))}
        .title-wrap {padding: 24px 20px 10px; border-bottom: 1px solid rgba(255,255,255,.08); margin-bottom: 12px}
        .title {font-weight: 800; font-size: 28px; letter-spacing: .2px; color: white}
        .subtitle {color: var(--fg); opacity:.8; margin-top: 6px}
        </style>
        """,
        unsafe_allow_html=True,
    )


def _header():
    st.markdown(
        """
        <div class="title-wrap">
          <div class="title">pistream</div>
          <div class="subtitle">Chudnovsky binary splitting, streamed to disk block by block.</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _cli_command(threads: int, digits: int, out_path: str, block_size: int, strategy: str, executor_kind: str, verify: bool) -> str:
    parts = ["python3", "-m", "pistream", "run", str(int(threads)), str(int(digits)), out_path]
    if block_size:
        parts += ["--block-size", str(int(block_size))]
    parts += ["--strategy", strategy, "--executor", executor_kind]
    if verify:
        parts += ["--verify"]
    return " ".join(parts)


def main():
    st.set_page_config(page_title="pistream", page_icon="🧮", layout="wide")
    _style()
    _header()
    if "history" not in st.session_state:
        st.session_state.history = []
    with st.sidebar:
        digits_spec = st.text_input("Digits after point", value="100K")
        threads = st.slider("Worker threads", min_value=1, max_value=os.cpu_count() or 8, value=min(8, os.cpu_count() or 8))
        strategy = st.selectbox("Split strategy", options=["partition", "tasks"], index=0)
        executor_kind = st.selectbox("Executor", options=["process", "thread"], index=0)
        out_path = st.text_input("Output path", value=os.path.join(os.getcwd(), DEFAULT_OUTPUT))
        with st.expander("Advanced"):
            block_size = st.number_input("Block size (0 = automatic)", min_value=0, max_value=25_000_000, value=0, step=100_000)
            verify = st.checkbox("Verify against spigot", value=False)
            preview_chars = st.number_input("Preview characters", min_value=0, max_value=5000, value=50, step=10)
        run = st.button("Compute", type="primary", use_container_width=True)

    if not run:
        if st.session_state.history:
            st.subheader("Recent runs")
            for item in st.session_state.history[:5]:
                st.write(item)
        return

    try:
        digits = parse_digit_count(digits_spec)
    except ValueError as e:
        st.error(str(e))
        return
    with st.spinner("Computing..."):
        try:
            report = compute_pi_to_file(
                digits,
                int(threads),
                out_path,
                block_size=int(block_size) or None,
                strategy=strategy,
                executor_kind=executor_kind,
            )
        except OSError as e:
            st.error(f"Cannot write {out_path}: {e}")
            return
    st.success(f"Saved to {report.path} in {report.elapsed_text}")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Digits", f"{report.digits:,}")
    with col2:
        st.metric("Terms", f"{report.terms:,}")
    with col3:
        st.metric("Precision (bits)", f"{report.precision_bits:,}")
    with col4:
        st.metric("Blocks", f"{report.blocks:,} x {report.block_size:,}")
    if preview_chars:
        head, tail = preview(report.path, int(preview_chars))
        st.code(f"{head}\n…\n{tail}", language="text")
    if verify:
        ok, checked = verify_output(report.path)
        if ok and check_output_format(report.path, report.digits):
            st.success(f"Verification passed ({checked} digits)")
        else:
            st.error("Verification failed")
    st.code(_cli_command(threads, report.digits, report.path, int(block_size), strategy, executor_kind, verify), language="bash")
    st.session_state.history.insert(0, f"{report.digits} digits -> {report.path}")


if __name__ == "__main__":
    main()
