DEBUG_RULE_ENGINE = False
