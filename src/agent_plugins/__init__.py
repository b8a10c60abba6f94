"""Coding agent plugins installer for Claude Code and OpenCode."""
