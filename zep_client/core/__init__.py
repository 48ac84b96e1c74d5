"""
Request plumbing shared by the resource clients.
"""
