"""One module per machine variant: paytable, classifier and strategy table."""
