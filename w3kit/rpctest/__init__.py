"""A local HTTP endpoint that answers one request defined in a golden file."""