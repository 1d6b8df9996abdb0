import streamlit as st

from todo_ui.client import API, TodoApiClient
from todo_ui.controller import Filter, TodoController

EMPTY = {
    Filter.ALL: "No tasks yet. Add one above to get started!",
    Filter.ACTIVE: "No active tasks. You're all caught up!",
    Filter.COMPLETED: "No completed tasks yet. Keep working!",
}

st.set_page_config(page_title="Todo List", layout="centered")
st.title("Todo List")

if "ctrl" not in st.session_state:
    st.session_state.ctrl = TodoController(TodoApiClient(API))
    st.session_state.ctrl.load()
if "confirm_delete" not in st.session_state:
    st.session_state.confirm_delete = None
ctrl: TodoController = st.session_state.ctrl


def on_submit():
    ctrl.create(st.session_state.new_title)
    if ctrl.last_error is None:
        st.session_state.new_title = ""


def on_edit_enter(todo_id: int):
    ctrl.change_edit(st.session_state[f"edit-{todo_id}"])
    ctrl.commit_edit()


with st.form("add", clear_on_submit=False):
    st.text_input("What needs to be done?", key="new_title", max_chars=255)
    st.form_submit_button("Add", key="add-submit", on_click=on_submit)

if ctrl.last_error is not None:
    st.error(str(ctrl.last_error))

c1, c2, c3 = st.columns(3)
c1.metric("Active", ctrl.active_count)
c2.metric("Completed", ctrl.completed_count)
c3.metric("Total", ctrl.total)

choice = st.radio(
    "Show",
    [f.value for f in Filter],
    index=[f.value for f in Filter].index(ctrl.filter.value),
    horizontal=True,
)
if choice != ctrl.filter.value:
    ctrl.set_filter(choice)
    st.rerun()

st.subheader(f"{ctrl.filter.value.title()} tasks")
if not ctrl.visible:
    st.info(EMPTY[ctrl.filter])

for todo in ctrl.visible:
    check, body, actions = st.columns([1, 8, 3])
    done_key = f"done-{todo.id}"
    # the checkbox always mirrors the cache, so a failed toggle snaps back
    st.session_state[done_key] = todo.completed
    check.checkbox(
        "done",
        key=done_key,
        label_visibility="collapsed",
        on_change=ctrl.toggle,
        args=(todo.id,),
    )

    if ctrl.editing is not None and ctrl.editing.id == todo.id:
        body.text_input(
            "title",
            value=ctrl.editing.title,
            key=f"edit-{todo.id}",
            max_chars=255,
            label_visibility="collapsed",
            on_change=on_edit_enter,
            args=(todo.id,),
        )
        actions.button("Cancel", key=f"cancel-{todo.id}", on_click=ctrl.cancel_edit)
    else:
        text = f"~~{todo.title}~~" if todo.completed else todo.title
        body.markdown(text)
        body.caption(f"Created: {todo.created_at:%Y-%m-%d %H:%M}")
        edit, delete = actions.columns(2)
        edit.button("Edit", key=f"edit-btn-{todo.id}", on_click=ctrl.start_edit, args=(todo.id,))
        if delete.button("Delete", key=f"del-{todo.id}"):
            st.session_state.confirm_delete = todo.id

    if st.session_state.confirm_delete == todo.id:
        st.warning(f'Are you sure you want to delete "{todo.title}"? This action cannot be undone.')
        yes, no = st.columns(2)
        if yes.button("Delete", key=f"confirm-{todo.id}", type="primary"):
            ctrl.delete(todo.id)
            st.session_state.confirm_delete = None
            st.rerun()
        if no.button("Cancel", key=f"keep-{todo.id}"):
            st.session_state.confirm_delete = None
            st.rerun()

st.caption("Click Edit to rename a task, use the checkbox to mark it complete.")
