# -*- coding: utf-8 -*-
from .policies import (
    Color_policy,
    Hue_sweep,
    Ramped_hue_sweep,
    policy_from_id,
    policy_ids,
    hsv_to_rgb,
)
