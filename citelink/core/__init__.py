"""Citation domain core: models, ports, and the citation engine."""
