"""Terminal theme, widgets, checklists, prompts and the terminal reporter."""