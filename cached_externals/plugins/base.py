# cached_externals/plugins/base.py
"""Plugin system base classes and manager"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional


class PluginPriority(Enum):
    """Plugin execution priority"""
    HIGHEST = 0
    HIGH = 25
    NORMAL = 50
    LOW = 75
    LOWEST = 100


class HookPoint(Enum):
    """Available hook points in the deployment lifecycle"""
    # Host deployment lifecycle
    DEPLOY_UPDATE_CODE_POST = "deploy.update_code.post"
    DEPLOY_FINALIZE_UPDATE_PRE = "deploy.finalize_update.pre"
    DEPLOY_FINALIZE_UPDATE_POST = "deploy.finalize_update.post"

    # Externals lifecycle
    EXTERNALS_SETUP_PRE = "externals.setup.pre"
    EXTERNALS_SETUP_POST = "externals.setup.post"
    EXTERNALS_UPDATE_PRE = "externals.update.pre"
    EXTERNALS_UPDATE_POST = "externals.update.post"


@dataclass
class PluginContext:
    """Context passed to plugin hooks and tasks"""
    hook_point: Optional[HookPoint]
    operation: str
    data: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Check if context has errors"""
        return len(self.errors) > 0


Task = Callable[[PluginContext], Awaitable[PluginContext]]


@dataclass
class TaskInfo:
    """A named task contributed by a plugin"""
    name: str
    description: str
    handler: Task
    plugin: str = ""


@dataclass
class PluginInfo:
    """Plugin metadata"""
    name: str
    version: str
    description: str
    author: Optional[str] = None
    enabled: bool = True
    priority: PluginPriority = PluginPriority.NORMAL
    hook_points: List[HookPoint] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)


class Plugin(ABC):
    """Base class for all plugins"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize plugin

        Args:
            config: Plugin-specific configuration
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self._info: Optional[PluginInfo] = None

    @abstractmethod
    def get_info(self) -> PluginInfo:
        """Get plugin information"""
        pass

    @property
    def info(self) -> PluginInfo:
        """Plugin information, built once so enable/disable sticks"""
        if self._info is None:
            self._info = self.get_info()
        return self._info

    def get_tasks(self) -> List[TaskInfo]:
        """Tasks this plugin contributes (optional)"""
        return []

    async def handle_hook(self, context: PluginContext) -> PluginContext:
        """
        Handle hook point

        Args:
            context: Plugin context

        Returns:
            Modified context
        """
        hook_point = context.hook_point
        handler_name = f"on_{hook_point.value.replace('.', '_')}"

        # Look for specific handler method
        handler = getattr(self, handler_name, None)
        if handler and callable(handler):
            return await handler(context)

        return context


class PluginManager:
    """Central plugin manager"""

    def __init__(self):
        self._plugins: Dict[str, Plugin] = {}
        self._hooks: Dict[HookPoint, List[Plugin]] = {hp: [] for hp in HookPoint}
        self._tasks: Dict[str, TaskInfo] = {}
        self.logger = logging.getLogger("PluginManager")

    def register(self, plugin: Plugin) -> None:
        """
        Register a plugin

        Args:
            plugin: Plugin instance
        """
        info = plugin.info

        if info.name in self._plugins:
            self.logger.warning(f"Plugin {info.name} already registered, replacing")
            self.unregister(info.name)

        self._plugins[info.name] = plugin

        # Register hooks
        for hook_point in info.hook_points:
            self._hooks[hook_point].append(plugin)
            # Sort by priority
            self._hooks[hook_point].sort(key=lambda p: p.info.priority.value)

        # Register tasks
        for task in plugin.get_tasks():
            task.plugin = info.name
            if task.name in self._tasks:
                self.logger.warning(f"Task {task.name} already defined, replacing")
            self._tasks[task.name] = task

        self.logger.info(f"Registered plugin: {info.name} v{info.version}")

    def unregister(self, plugin_name: str) -> None:
        """
        Unregister a plugin

        Args:
            plugin_name: Plugin name
        """
        if plugin_name not in self._plugins:
            return

        plugin = self._plugins.pop(plugin_name)

        # Remove from hooks
        for hook_list in self._hooks.values():
            if plugin in hook_list:
                hook_list.remove(plugin)

        for name in [n for n, t in self._tasks.items() if t.plugin == plugin_name]:
            del self._tasks[name]

        self.logger.info(f"Unregistered plugin: {plugin_name}")

    async def execute_hook(self,
                           hook_point: HookPoint,
                           context: PluginContext) -> PluginContext:
        """
        Execute plugins for a hook point

        Args:
            hook_point: Hook point to execute
            context: Plugin context

        Returns:
            Modified context after all plugins
        """
        context.hook_point = hook_point

        for plugin in list(self._hooks[hook_point]):
            info = plugin.info

            if not info.enabled:
                continue

            try:
                self.logger.debug(f"Executing plugin {info.name} for {hook_point.value}")
                context = await plugin.handle_hook(context)

                # Stop if errors occurred and plugin has high priority
                if context.has_errors() and info.priority.value <= PluginPriority.HIGH.value:
                    self.logger.warning(f"Plugin {info.name} reported errors, stopping hook execution")
                    break

            except Exception as e:
                self.logger.error(f"Plugin {info.name} failed: {e}")
                context.add_error(f"Plugin {info.name} error: {str(e)}")

        return context

    async def run_task(self, name: str, context: PluginContext) -> PluginContext:
        """
        Run a named task

        Exceptions raised by the task propagate to the caller.

        Raises:
            KeyError: If no plugin defines the task
        """
        if name not in self._tasks:
            raise KeyError(f"Unknown task: {name}")

        self.logger.debug(f"Running task {name}")
        return await self._tasks[name].handler(context)

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get plugin by name"""
        return self._plugins.get(name)

    def list_plugins(self) -> List[PluginInfo]:
        """List all registered plugins"""
        return [p.info for p in self._plugins.values()]

    def list_tasks(self) -> List[TaskInfo]:
        """List all registered tasks"""
        return sorted(self._tasks.values(), key=lambda t: t.name)

    def enable_plugin(self, name: str) -> None:
        """Enable a plugin"""
        if name in self._plugins:
            self._plugins[name].info.enabled = True

    def disable_plugin(self, name: str) -> None:
        """Disable a plugin"""
        if name in self._plugins:
            self._plugins[name].info.enabled = False


# Global plugin manager instance
plugin_manager = PluginManager()
