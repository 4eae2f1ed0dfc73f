"""Plugins that record metadata about the hosting AWS environment."""

__all__ = ["beanstalk", "ec2", "ecs"]