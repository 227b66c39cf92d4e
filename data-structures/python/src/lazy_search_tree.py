import copy
import logging
from typing import TypeVar, Generic, List, Iterator, Optional, Tuple, Any, Dict

from traverser import Visitor

T = TypeVar('T')

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    pass


class EmptyTreeError(NotFoundError):
    pass


class LazySearchTree(Generic[T]):
    class Node:
        def __init__(self, key: T) -> None:
            self.key: T = key
            self.left: Optional['LazySearchTree.Node'] = None
            self.right: Optional['LazySearchTree.Node'] = None
            self.tombstoned: bool = False

    def __init__(self) -> None:
        self._root: Optional[LazySearchTree.Node] = None
        self._soft_size: int = 0
        self._hard_size: int = 0

    def insert(self, key: T) -> bool:
        if self._root is None:
            self._root = LazySearchTree.Node(key)
            self._soft_size += 1
            self._hard_size += 1
            return True

        node = self._root
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = LazySearchTree.Node(key)
                    break
                node = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = LazySearchTree.Node(key)
                    break
                node = node.right
            else:
                if not node.tombstoned:
                    return False
                node.tombstoned = False
                self._soft_size += 1
                return True

        self._soft_size += 1
        self._hard_size += 1
        return True

    def remove(self, key: T) -> bool:
        node = self._find_node(self._root, key)
        if node is None or node.tombstoned:
            return False
        node.tombstoned = True
        self._soft_size -= 1
        return True

    def remove_hard(self, key: T) -> bool:
        parent: Optional[LazySearchTree.Node] = None
        node = self._root
        while node is not None:
            if key < node.key:
                parent = node
                node = node.left
            elif key > node.key:
                parent = node
                node = node.right
            else:
                break

        if node is None:
            logger.debug("remove_hard: key %r not present", key)
            return False

        removed_live = not node.tombstoned
        self._splice(parent, node)
        return removed_live

    def collect_garbage(self) -> bool:
        old_hard_size = self._hard_size
        for parent, node in self._post_order():
            if node.tombstoned:
                self._splice(parent, node)
        reclaimed = old_hard_size - self._hard_size
        logger.debug(
            "collect_garbage: reclaimed %d node(s), soft_size=%d hard_size=%d",
            reclaimed, self._soft_size, self._hard_size,
        )
        return reclaimed != 0

    def find(self, key: T) -> T:
        node = self._find_node(self._root, key)
        if node is None or node.tombstoned:
            raise NotFoundError(key)
        return node.key

    def contains(self, key: T) -> bool:
        node = self._find_node(self._root, key)
        return node is not None and not node.tombstoned

    def find_min(self) -> T:
        if self._root is None:
            raise EmptyTreeError("min from empty tree")
        for node in self._walk(self._root):
            if not node.tombstoned:
                return node.key
        raise NotFoundError("min from tree with no live keys")

    def find_max(self) -> T:
        if self._root is None:
            raise EmptyTreeError("max from empty tree")
        for node in self._walk(self._root, reverse=True):
            if not node.tombstoned:
                return node.key
        raise NotFoundError("max from tree with no live keys")

    def find_min_hard(self) -> T:
        if self._root is None:
            raise EmptyTreeError("min from empty tree")
        return self._find_min_hard(self._root).key

    def find_max_hard(self) -> T:
        if self._root is None:
            raise EmptyTreeError("max from empty tree")
        return self._find_max_hard(self._root).key

    def size(self) -> int:
        return self._soft_size

    def hard_size(self) -> int:
        return self._hard_size

    def is_empty(self) -> bool:
        return self._soft_size == 0

    def clear(self) -> None:
        if self._hard_size:
            logger.debug("clear: discarding %d node(s)", self._hard_size)
        self._root = None
        self._soft_size = 0
        self._hard_size = 0

    def height(self) -> int:
        if self._root is None:
            return -1
        height = -1
        level: List[LazySearchTree.Node] = [self._root]
        while level:
            height += 1
            next_level: List[LazySearchTree.Node] = []
            for node in level:
                if node.left is not None:
                    next_level.append(node.left)
                if node.right is not None:
                    next_level.append(node.right)
            level = next_level
        return height

    def traverse_live(self, visit: Visitor[T]) -> None:
        for node in self._walk(self._root):
            if not node.tombstoned:
                visit(node.key)

    def traverse_all(self, visit: Visitor[T]) -> None:
        for node in self._walk(self._root):
            visit(node.key)

    def in_order(self) -> List[T]:
        result: List[T] = []
        self.traverse_live(result.append)
        return result

    def in_order_all(self) -> List[T]:
        result: List[T] = []
        self.traverse_all(result.append)
        return result

    def clone(self) -> 'LazySearchTree[T]':
        duplicate: LazySearchTree[T] = LazySearchTree()
        duplicate._soft_size = self._soft_size
        if self._root is None:
            return duplicate

        duplicate._root = self._copy_node(self._root)
        duplicate._hard_size = 1
        stack: List[Tuple[LazySearchTree.Node, LazySearchTree.Node]] = [(self._root, duplicate._root)]
        while stack:
            source, target = stack.pop()
            if source.right is not None:
                target.right = self._copy_node(source.right)
                duplicate._hard_size += 1
                stack.append((source.right, target.right))
            if source.left is not None:
                target.left = self._copy_node(source.left)
                duplicate._hard_size += 1
                stack.append((source.left, target.left))
        return duplicate

    def _copy_node(self, node: Node) -> Node:
        duplicate = LazySearchTree.Node(node.key)
        duplicate.tombstoned = node.tombstoned
        return duplicate

    def _find_node(self, node: Optional[Node], key: T) -> Optional[Node]:
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return None

    def _find_min_hard(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _find_max_hard(self, node: Node) -> Node:
        while node.right is not None:
            node = node.right
        return node

    def _walk(self, node: Optional[Node], reverse: bool = False) -> Iterator[Node]:
        """In-order node generator over every node; reverse yields descending order."""
        stack: List[LazySearchTree.Node] = []
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.right if reverse else node.left
            node = stack.pop()
            yield node
            node = node.left if reverse else node.right

    def _splice(self, parent: Optional[Node], node: Node) -> None:
        """Structurally removes node; parent is None when node is the root."""
        removed_live = not node.tombstoned

        if node.left is not None and node.right is not None:
            # The successor is unlinked before its key and state move up.
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            if successor_parent is node:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
            node.key = successor.key
            node.tombstoned = successor.tombstoned
        else:
            replacement = node.left if node.left is not None else node.right
            if parent is None:
                self._root = replacement
            elif parent.left is node:
                parent.left = replacement
            else:
                parent.right = replacement

        self._hard_size -= 1
        if removed_live:
            self._soft_size -= 1

    def _post_order(self) -> List[Tuple[Optional[Node], Node]]:
        result: List[Tuple[Optional[LazySearchTree.Node], LazySearchTree.Node]] = []
        if self._root is None:
            return result
        stack: List[Tuple[Optional[LazySearchTree.Node], LazySearchTree.Node]] = [(None, self._root)]
        while stack:
            parent, node = stack.pop()
            result.append((parent, node))
            if node.left is not None:
                stack.append((node, node.left))
            if node.right is not None:
                stack.append((node, node.right))
        result.reverse()
        return result

    def __len__(self) -> int:
        return self._soft_size

    def __contains__(self, key: T) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[T]:
        for node in self._walk(self._root):
            if not node.tombstoned:
                yield node.key

    def __copy__(self) -> 'LazySearchTree[T]':
        return self.clone()

    def __deepcopy__(self, memo: Dict[int, Any]) -> 'LazySearchTree[T]':
        duplicate = self.clone()
        memo[id(self)] = duplicate
        for node in duplicate._walk(duplicate._root):
            node.key = copy.deepcopy(node.key, memo)
        return duplicate

    def __repr__(self) -> str:
        return f"LazySearchTree({self.in_order()})"

    def __str__(self) -> str:
        return (
            f"LazySearchTree(size={self._soft_size}, "
            f"hard_size={self._hard_size}, height={self.height()})"
        )
