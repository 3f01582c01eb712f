import json

import gradio as gr

from json_regex_mapper.handlers import (
    EXAMPLE_SPEC,
    TABLE_HEADERS,
    export_transformed_handler,
    handle_root_change,
    load_dataset_with_preview,
    preview_transform_handler,
    sync_spec_from_table,
    table_from_spec,
    validate_spec_handler,
)

# --- UI Definition ---
with gr.Blocks(title="JSON Regex Mapper") as demo:
    gr.Markdown("# JSON Regex Mapper")
    gr.Markdown(
        "Upload JSON records, describe regex capture / replace operations on pointer paths, "
        "and preview or export the transformed records."
    )

    # State
    json_data_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Operations
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON / JSON Lines File", file_types=[".json", ".jsonl"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            root_path_selector = gr.Dropdown(
                label="Records Root Pointer",
                choices=["(root)"],
                value="(root)",
                allow_custom_value=True,
                interactive=True,
            )
            record_count = gr.Textbox(label="Record Count", interactive=False)

            gr.Markdown("### 2. Operations")
            gr.Markdown("`capture` writes group 1 to *Output*; `replace` rewrites *Target* using the *With* template.")
            operations_table = gr.Dataframe(
                headers=TABLE_HEADERS,
                datatype=["str", "str", "str", "str"],
                col_count=(4, "fixed"),
                interactive=True,
                label="Operations",
            )
            table_to_spec_btn = gr.Button("Table -> Spec")

            spec_text = gr.Code(
                value=json.dumps(EXAMPLE_SPEC, indent=2),
                language="json",
                label="Spec (JSON)",
            )
            with gr.Row():
                spec_to_table_btn = gr.Button("Spec -> Table")
                validate_btn = gr.Button("Validate Spec")
            spec_status = gr.Textbox(label="Spec Status", interactive=False)

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 3. Preview")
            preview_btn = gr.Button("Preview Transform")
            transform_preview = gr.JSON(label="Preview (first 3 records)")

            gr.Markdown("### 4. Export")
            output_format = gr.Radio(choices=["JSON", "JSON Lines"], value="JSON", label="Output Format")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
            export_btn = gr.Button("Export Data", variant="primary")
            download_output = gr.File(label="Download Result")

    file_input.upload(
        fn=load_dataset_with_preview,
        inputs=[file_input],
        outputs=[json_data_state, root_path_selector, status_msg, transform_preview, record_count],
    )

    root_path_selector.change(
        fn=handle_root_change,
        inputs=[json_data_state, root_path_selector],
        outputs=[record_count, transform_preview],
    )

    table_to_spec_btn.click(
        fn=sync_spec_from_table,
        inputs=[operations_table],
        outputs=[spec_text],
    )

    spec_to_table_btn.click(
        fn=table_from_spec,
        inputs=[spec_text],
        outputs=[operations_table, spec_status],
    )

    validate_btn.click(
        fn=validate_spec_handler,
        inputs=[spec_text],
        outputs=[spec_status],
    )

    preview_btn.click(
        fn=preview_transform_handler,
        inputs=[json_data_state, spec_text, root_path_selector],
        outputs=[transform_preview, spec_status],
    )

    export_btn.click(
        fn=export_transformed_handler,
        inputs=[json_data_state, spec_text, output_format, output_filename, root_path_selector],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
