def clamp(value, lower, upper):
    return max(min(value, upper), lower)


def scale(value, in_min, in_max, out_min, out_max):
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min
