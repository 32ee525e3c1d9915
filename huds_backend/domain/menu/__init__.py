"""Menu domain: HUDS records, condensed menus and condensation rules."""
