"""Cross-method analysis: selection comparison and result export."""

from .method_comparison import compare_selections
from .results_synthesis import save_results

__all__ = [
    'compare_selections',
    'save_results'
]
