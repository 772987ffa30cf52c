from .edit_planner_node import edit_planner_node
from .section_patcher_node import section_patcher_node
from .section_summarizer_node import section_summarizer_node
from .edit_saver_node import edit_saver_node

__all__ = [
    "edit_planner_node",
    "section_patcher_node",
    "section_summarizer_node",
    "edit_saver_node",
]
