"""Terminal styling, header panels, pages and modals for the node dashboard."""