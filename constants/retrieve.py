DEFAULT_N_RESULTS = 3
