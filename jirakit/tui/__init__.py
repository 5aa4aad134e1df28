"""Terminal screen, a scrollable text view and pager helpers."""