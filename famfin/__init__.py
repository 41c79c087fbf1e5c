"""famfin - household income, budgets and expenses."""
