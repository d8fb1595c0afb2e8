# Bounded byte stack
