"""Pure helpers shared by models, services and widgets."""
