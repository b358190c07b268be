from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from docinbox.container import build_services
from docinbox.domain.errors import StoreError, TriageActionError
from docinbox.domain.models import InboxItem, InboxView
from docinbox.logging_ import setup_logging
from docinbox.settings import LOG_LEVEL


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("flash", "")


def _get_services() -> dict:
    if st.session_state["services"] is None:
        st.session_state["services"] = build_services()
    return st.session_state["services"]


def _set_flash(message: str | None) -> None:
    st.session_state["flash"] = message or ""


def _run_action(action, *args) -> None:
    try:
        _set_flash(action(*args))
    except TriageActionError as exc:
        _set_flash(str(exc))
    except ValueError as exc:
        _set_flash(f"Error: {exc}")


def _undo_label(view: InboxView) -> str:
    return f"Undo {view.undo_info}" if view.undoable else "Undo"


def _render_preview(services: dict, item: InboxItem) -> None:
    thumbnails = services["thumbnail_cache"]
    if item.has_hires_thumb or thumbnails.ready(item.ulid):
        st.image(str(thumbnails.path_for(item.ulid)), width=600)
    elif item.has_thumbnail:
        try:
            data, _ = services["store"].fetch_thumbnail(item.ulid)
            st.image(data)
        except StoreError:
            st.caption("Thumbnail unavailable.")
        st.caption("Hi-res preview is being generated; refresh to load it.")
    if item.view_url:
        st.markdown(f"[Open document]({item.view_url})")


def _render_item(services: dict, view: InboxView) -> None:
    triage = services["triage_service"]
    item = view.item
    if item is None:
        return
    st.subheader(item.name)
    meta = [item.document_type, item.folder, f"ingress {item.ingress_time}" if item.ingress_time else ""]
    if item.document_date:
        meta.append(f"date {item.document_date}{' (inferred)' if item.date_is_inferred else ''}")
    st.caption(" · ".join(part for part in meta if part))
    if item.processing:
        st.info("Processing: extracting text…")
    elif item.llm_working:
        st.info("LLM working: inferring document date…")

    left, right = st.columns([3, 2])
    with left:
        _render_preview(services, item)
    with right:
        st.markdown("**Shortcuts**")
        for shortcut in triage.shortcuts:
            if st.button(shortcut.name, key=f"shortcut_{shortcut.key}"):
                _run_action(triage.tag_with_shortcut, shortcut.key, item.ulid, item.name)
                st.rerun()

        if view.recent_sets:
            st.markdown("**Recent tag sets**")
            for index, recent in enumerate(view.recent_sets):
                if st.button(recent.label, key=f"recent_{index}"):
                    _run_action(triage.apply_recent, index, item.ulid, item.name)
                    st.rerun()

        cols = st.columns(2)
        if cols[0].button("Done / next"):
            triage.done(item.ulid)
            _set_flash("")
            st.rerun()
        if cols[1].button(_undo_label(view), disabled=not view.undoable):
            _run_action(triage.undo)
            st.rerun()

    with st.expander("All tags"):
        for group in view.groups:
            st.markdown(f"**{group.name}**")
            for tag in group.tags:
                checked = st.checkbox(tag.name, value=tag.active, key=f"tag_{item.ulid}_{tag.tag_id}")
                if checked != tag.active:
                    try:
                        triage.toggle_tag(item.ulid, tag.tag_id, tag.active)
                    except TriageActionError as exc:
                        _set_flash(f"Error: {exc}")
                    st.rerun()
        with st.form("create_tag", clear_on_submit=True):
            name = st.text_input("New tag")
            color = st.color_picker("Color", value="#3498db")
            group_name = st.selectbox("Group", options=["", *view.tag_groups])
            if st.form_submit_button("Create and apply"):
                try:
                    tag, applied = triage.create_tag(name, color, group_name, item.ulid)
                    _set_flash(f"created {tag.name}{' ← ' + item.name if applied else ''}")
                except (TriageActionError, ValueError) as exc:
                    _set_flash(f"Error: {exc}")
                st.rerun()

    if item.text_preview:
        with st.expander("Text preview"):
            st.text(item.text_preview)


def main() -> None:
    setup_logging(LOG_LEVEL)
    st.set_page_config(page_title="docinbox", layout="wide")
    _init_state()
    st.title("Inbox")

    try:
        services = _get_services()
    except (RuntimeError, ValueError) as exc:
        st.error(f"Startup failed: {exc}")
        return

    flash = st.session_state.get("flash")
    if flash:
        st.success(flash)

    try:
        view = services["triage_service"].current_view()
    except StoreError as exc:
        st.error(f"Error connecting to godocs server: {exc}")
        return

    st.caption(f"{view.remaining} remaining")
    if view.done:
        st.success("Inbox zero.")
        return
    _render_item(services, view)
    if st.button("Refresh"):
        st.rerun()


if __name__ == "__main__":
    main()
