"""
chatprompt: prompt persistence, AI provider dispatch and token-cost accounting.

Entry points for callers (an HTTP layer, a CLI, a worker) live in
`chatprompt.services`; wiring helpers live in `chatprompt.core.dependencies`.
"""
