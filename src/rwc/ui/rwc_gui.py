"""
DearPyGui front end for rwc.
Lets the user list files, pick count columns, and view the resulting table.
"""
import dearpygui.dearpygui as dpg

from rwc.common.errors import BackendError
from rwc.common.models import CountOptions
from rwc.ui.workflow_backend import parse_path_text, run_count_workflow, summarize

COLUMN_FLAGS = ("bytes", "chars", "words", "lines")


def run_workflow(path_box, flag_boxes, totals_box, table_parent, log_window):
    try:
        dpg.set_value(log_window, "Counting...\n")
        paths = parse_path_text(dpg.get_value(path_box))
        flags = {name: dpg.get_value(box) for name, box in flag_boxes.items()}
        options = CountOptions.from_flags(show_totals=dpg.get_value(totals_box), **flags)
        report = run_count_workflow(paths, options=options)
    except BackendError as e:
        dpg.set_value(log_window, dpg.get_value(log_window) + f"Error: {e.message}\n")
        return

    dpg.delete_item(table_parent, children_only=True)
    with dpg.table(parent=table_parent, header_row=True):
        dpg.add_table_column(label="path")
        for name in report.columns:
            dpg.add_table_column(label=name)
        for row in report.rows:
            with dpg.table_row():
                dpg.add_text(row.label)
                if row.error is not None:
                    dpg.add_text(row.error, color=(220, 60, 60))
                else:
                    for cell in row.cells:
                        dpg.add_text(cell)
    dpg.set_value(log_window, "\n".join(summarize(report)) + "\n")


def main():
    dpg.create_context()
    dpg.create_viewport(title="rwc", width=640, height=480)

    TEXT = {
        "paths": "Files to count (one path per line):",
        "columns": "Columns:",
        "run": "Run:",
    }

    with dpg.window(label="rwc", width=620, height=460):
        dpg.add_text(TEXT["paths"])
        path_box = dpg.add_input_text(multiline=True, width=560, height=100)

        dpg.add_text(TEXT["columns"])
        flag_boxes = {}
        with dpg.group(horizontal=True):
            for name in COLUMN_FLAGS:
                flag_boxes[name] = dpg.add_checkbox(label=name, default_value=name != "chars")
        totals_box = dpg.add_checkbox(label="show totals", default_value=True)

        dpg.add_separator()
        dpg.add_text(TEXT["run"])
        log_window = dpg.add_input_text(multiline=True, readonly=True, width=560, height=60, default_value="")
        table_parent = dpg.add_group()
        dpg.add_button(label="Count", callback=lambda: run_workflow(
            path_box,
            flag_boxes,
            totals_box,
            table_parent,
            log_window,
        ))

    dpg.setup_dearpygui()
    dpg.show_viewport()
    dpg.start_dearpygui()
    dpg.destroy_context()


if __name__ == "__main__":
    main()
