from .engine import BlockEditor, ContainerEditorState, PickerState, PickerStep
from .forms import DetailEditor, FormField, editor_for

__all__ = ["BlockEditor", "ContainerEditorState", "PickerState", "PickerStep", "DetailEditor", "FormField", "editor_for"]
