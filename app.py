"""
Main NiceGUI application for GeoPaths.

Renders the paths on a ui.leaflet map and provides the path list, the
mode toolbar, the rename dialog and the save/export buttons. All state lives
in a per-client EditorSession; this file only forwards UI events to it and
redraws from its read-only state.
"""

from nicegui import ui
import logging

from dotenv import load_dotenv
load_dotenv()

from geopaths.config import (
    get_log_level,
    get_map_center,
    get_map_zoom,
    get_port,
    get_storage_secret,
)
from geopaths.colors import SELECTED_BACKGROUND, color_for_key
from geopaths.edit import InsertionEnd, Mode, is_name_taken, setup_map_handlers
from geopaths.session import EditorSession
from geopaths.storage import create_store

logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


def download_export(export):
    """Hand an ExportFile to the browser."""
    if export is None:
        return
    ui.download(export.content.encode('utf-8'), export.filename, export.media_type)


# UI Construction - encapsulated in page function so every client gets its own session
@ui.page('/')
def main_page():
    ui.query('body').style('margin: 0; padding: 0; overflow: hidden;')

    def notify(message: str, level: str):
        ui.notify(message, type=level, position='bottom-left')

    store = create_store()
    logger.info(f"New client session using {store.backend_type} storage")
    session = EditorSession.load(store, notifier=notify)

    # --- Map ---
    leaflet = ui.leaflet(center=get_map_center(), zoom=get_map_zoom()).classes('w-full h-screen')

    # Layers we drew, so a redraw can drop them without touching the tile layer
    drawn_layers = []

    def draw_paths():
        for layer in drawn_layers:
            leaflet.remove_layer(layer)
        drawn_layers.clear()

        for path in session.paths:
            color = color_for_key(path.color_key)
            coords = [[p.lat, p.lng] for p in path.points]
            if len(coords) >= 2:
                drawn_layers.append(leaflet.generic_layer(
                    name='polyline',
                    args=[coords, {'color': color, 'weight': 3, 'opacity': 1}],
                ))
            for lat_lng in coords:
                drawn_layers.append(leaflet.generic_layer(
                    name='circleMarker',
                    args=[lat_lng, {'radius': 5, 'color': color, 'weight': 3, 'fillColor': '#ffffff', 'fillOpacity': 1}],
                ))

    # --- Cursor readout ---
    with ui.card().classes('fixed left-4 bottom-4 z-10 py-1 px-3') as cursor_card:
        cursor_label = ui.label('').classes('text-sm')
    cursor_card.set_visibility(False)

    def refresh_cursor():
        text = session.cursor_label()
        cursor_card.set_visibility(text is not None)
        if text is not None:
            cursor_label.text = text

    # --- Path list panel ---
    @ui.refreshable
    def render_path_list():
        for summary in session.path_summaries():
            color = color_for_key(summary.color_key)
            background = SELECTED_BACKGROUND if summary.selected else 'transparent'

            def make_select_handler(index):
                def handler():
                    if session.select_path(index):
                        render_path_list.refresh()
                return handler

            with ui.button(on_click=make_select_handler(summary.index)) \
                    .props('flat no-caps align=left') \
                    .classes('w-full') \
                    .style(f'background-color: {background}; color: {color}'):
                ui.icon('circle')
                ui.label(summary.name).classes('ml-2 truncate')
                ui.badge(str(summary.point_count)).props('color=grey-7').classes('ml-auto')

    def refresh_paths():
        draw_paths()
        render_path_list.refresh()

    # --- Rename dialog ---
    with ui.dialog() as rename_dialog, ui.card().classes('w-96'):
        ui.label('Rename path').classes('text-lg font-bold')
        ui.label('Enter a new name for the path.').classes('text-gray-500 text-sm')
        name_input = ui.input('New path name').props('autofocus').classes('w-full')
        duplicate_label = ui.label('Another path already has this name.').classes('text-orange-500 text-sm')
        duplicate_label.set_visibility(False)

        def check_duplicate(e):
            duplicate_label.set_visibility(
                is_name_taken(session.paths, e.value or '', exclude_index=session.selected_index)
            )

        name_input.on_value_change(check_duplicate)

        def do_confirm():
            if session.confirm_rename(name_input.value or ''):
                refresh_paths()
            rename_dialog.close()

        with ui.row().classes('w-full justify-end gap-2 mt-4'):
            ui.button('Cancel', on_click=rename_dialog.close).props('flat')
            ui.button('OK', on_click=do_confirm).props('color=primary')

    # Closing the dialog any other way discards the pending name
    rename_dialog.on('hide', lambda: session.cancel_rename())

    def open_rename():
        name_input.value = session.open_rename()
        rename_dialog.open()

    def add_path():
        session.add_path()
        refresh_paths()

    def remove_path():
        if session.remove_selected_path():
            refresh_paths()

    with ui.card().classes('fixed right-4 top-4 w-72 max-h-[70vh] z-10 flex flex-col gap-2'):
        ui.label('Paths').classes('text-xl font-bold')
        with ui.row().classes('gap-1'):
            ui.button('New path', on_click=add_path).props('flat dense')
            ui.button('Rename', on_click=open_rename).props('flat dense')
            ui.button('Remove', on_click=remove_path).props('flat dense')
        with ui.column().classes('w-full gap-1 overflow-y-auto'):
            render_path_list()

    # --- Mode toolbar ---
    with ui.card().classes('fixed left-4 top-4 z-10 flex flex-col gap-2'):
        with ui.row().classes('gap-1'):
            move_btn = ui.button(icon='open_with').props('flat round')
            move_btn.tooltip('Move map')
            edit_btn = ui.button(icon='edit').props('flat round')
            edit_btn.tooltip('Add points')

        with ui.column().classes('gap-0') as edit_options:
            ui.label('End to edit').classes('text-xs font-bold text-gray-500')
            ui.radio(
                {InsertionEnd.FRONT.value: 'Front', InsertionEnd.BACK.value: 'Back'},
                value=session.insertion_end.value,
                on_change=lambda e: session.set_insertion_end(e.value),
            ).props('inline dense')
            ui.label('Left click: add point').classes('text-xs')
            ui.label('Right click: remove point').classes('text-xs')

        def update_toolbar(state):
            editing = state.mode is Mode.EDITING
            move_btn.props(f'color={"grey" if editing else "primary"}')
            edit_btn.props(f'color={"primary" if editing else "grey"}')
            edit_options.set_visibility(editing)

        session.modes.set_on_state_change(update_toolbar)
        move_btn.on_click(lambda: session.enter_moving())
        edit_btn.on_click(lambda: session.enter_editing())
        update_toolbar(session.edit_state)

    # --- Save / export ---
    with ui.card().classes('fixed right-4 bottom-4 z-10'):
        with ui.row().classes('gap-1'):
            ui.button('Save', icon='save', on_click=session.save_to_storage).props('flat color=secondary')
            ui.button('JSON', icon='account_tree',
                      on_click=lambda: download_export(session.export_structured())).props('flat')
            ui.button('CSV', icon='backup_table',
                      on_click=lambda: download_export(session.export_tabular())).props('flat')

    setup_map_handlers(leaflet, session, refresh_paths=refresh_paths, refresh_cursor=refresh_cursor)
    draw_paths()


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='GeoPaths',
        port=get_port(),
        storage_secret=get_storage_secret(),
    )
