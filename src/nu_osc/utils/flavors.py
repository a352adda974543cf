# flavour basis indices, electron first (the only one feeling the matter potential)
electron = 0
muon = 1
tau = 2
sterile = 3
