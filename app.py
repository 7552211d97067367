import logging
import os

import gradio as gr

from health_export_tables.handlers import (
    export_choices_update,
    export_tables_handler,
    load_export_with_preview,
    preview_category_handler,
)

logging.basicConfig(
    level=os.environ.get("HEALTH_EXPORT_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="Health Export Tables") as demo:
    gr.Markdown("# Health Export Tables")
    gr.Markdown("Upload a health data export, browse the per-category tables, and export them as CSV.")

    # State
    result_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Profile
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload export.xml or export.zip", file_types=[".xml", ".zip"])
            include_end_date = gr.Checkbox(label="Keep calendar date of end time", value=False)
            status_msg = gr.Textbox(label="Status", interactive=False)
            record_count = gr.Textbox(label="Record Count", interactive=False)

            gr.Markdown("### 2. Profile")
            profile_view = gr.JSON(label="Profile")

        # Right Panel: Tables
        with gr.Column(scale=2):
            gr.Markdown("### 3. Categories")
            summary_table = gr.Dataframe(label="Summary", interactive=False)
            category_selector = gr.Dropdown(label="Category", choices=[], value=None, interactive=True)
            category_preview = gr.Dataframe(label="Preview (first 20 rows)", interactive=False)

            gr.Markdown("### 4. Export")
            export_categories = gr.Dropdown(
                label="Categories to export",
                choices=[],
                value=[],
                multiselect=True,
                interactive=True,
            )
            output_prefix = gr.Textbox(label="Output File Prefix (optional)", placeholder="export")
            export_btn = gr.Button("Export CSV", variant="primary")
            download_output = gr.File(label="Download Result", file_count="multiple")

    upload_event = file_input.upload(
        fn=load_export_with_preview,
        inputs=[file_input, include_end_date],
        outputs=[result_state, category_selector, status_msg, profile_view, summary_table, record_count],
    )
    upload_event.then(
        fn=export_choices_update,
        inputs=[result_state],
        outputs=[export_categories],
    )

    category_selector.change(
        fn=preview_category_handler,
        inputs=[result_state, category_selector],
        outputs=[category_preview],
    )

    export_btn.click(
        fn=export_tables_handler,
        inputs=[result_state, export_categories, output_prefix],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
