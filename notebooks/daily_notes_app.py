import marimo

__generated_with = "0.13.10"
app = marimo.App(width="medium", app_title="Daily Notes")


# ---------------------------------------------------------------------------
# Bootstrap: settings, vault, index
# ---------------------------------------------------------------------------


@app.cell
def _setup():
    import logging
    import sys
    from pathlib import Path

    import marimo as mo

    ROOT = Path(__file__).parent.parent
    SRC = ROOT / "src"
    VAULT_DIR = ROOT / "vault"

    if str(SRC) not in sys.path:
        sys.path.insert(0, str(SRC))

    from dailynotes import (
        FoldManager,
        LocalVault,
        NoteCreator,
        NoteIndex,
        NoticeLog,
        PaneWorkspace,
        load_settings,
    )

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    VAULT_DIR.mkdir(exist_ok=True)
    settings = load_settings(ROOT / "daily_notes.yaml")
    store = LocalVault(VAULT_DIR)
    notices = NoticeLog()
    folds = FoldManager(VAULT_DIR / ".dailynotes" / "folds.json")
    workspace = PaneWorkspace()

    index = NoteIndex(store, settings, notices)
    index.reindex()
    return (
        NoteCreator,
        folds,
        index,
        mo,
        notices,
        settings,
        store,
        workspace,
    )


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------


@app.cell
def _controls(mo, settings):
    import datetime as dt

    day_picker = mo.ui.date(value=dt.date.today(), label="Date")
    split_box = mo.ui.checkbox(value=False, label="Open in new split")
    confirm_box = mo.ui.checkbox(
        value=not settings.confirm_before_create,
        label="Yes, create the note if it does not exist",
    )
    create_btn = mo.ui.run_button(label="Create note")
    return confirm_box, create_btn, day_picker, split_box


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@app.cell
async def _create(
    NoteCreator,
    confirm_box,
    create_btn,
    day_picker,
    folds,
    index,
    mo,
    notices,
    settings,
    store,
    split_box,
    workspace,
):
    async def ask(prompt):
        # The checkbox above plays the role of the dialog's CTA
        return bool(confirm_box.value)

    creator = NoteCreator(
        store,
        settings,
        workspace=workspace,
        confirm=ask,
        notices=notices,
        folds=folds,
        index=index,
    )

    created = None
    if create_btn.value:
        existing = index.lookup(day_picker.value)
        created = existing or await creator.create_note(
            day_picker.value, open_in_split=split_box.value
        )
        if existing is not None:
            await workspace.get_unpinned_leaf().open_file(existing, active=True)
            index.set_active_file(existing)
    index.refresh()

    if notices.messages:
        status = mo.callout(mo.md("\n\n".join(notices.messages)), kind="warn")
        notices.clear()
    elif created is not None:
        status = mo.callout(mo.md(f"Opened **{created.path}**"), kind="success")
    else:
        status = mo.md("")
    return created, status


# ---------------------------------------------------------------------------
# Index table and active note
# ---------------------------------------------------------------------------


@app.cell
def _notes_table(created, index, mo):
    frame = index.to_frame()
    notes_table = (
        mo.ui.table(frame, selection=None)
        if frame.height
        else mo.md("_No daily notes yet._")
    )
    return (notes_table,)


@app.cell
def _active_note(created, index, mo, store, workspace):
    pane = workspace.active_pane
    if pane is None or pane.note is None:
        active_note = mo.md("_Pick a date and press **Create note**._")
    else:
        heading = pane.note.basename
        if index.active_uid is not None:
            heading += f" `{index.active_uid}`"
        active_note = mo.vstack([mo.md(f"### {heading}"), mo.md(store.read(pane.note.path))])
    return (active_note,)


# ---------------------------------------------------------------------------
# Main layout
# ---------------------------------------------------------------------------


@app.cell
def _main_layout(
    active_note,
    confirm_box,
    create_btn,
    day_picker,
    mo,
    notes_table,
    split_box,
    status,
):
    mo.vstack(
        [
            mo.md("## Daily notes"),
            mo.hstack([day_picker, split_box, confirm_box, create_btn], gap="12px", align="center"),
            status,
            mo.ui.tabs({"Note": active_note, "Index": notes_table}),
        ]
    )
    return


if __name__ == "__main__":
    app.run()
