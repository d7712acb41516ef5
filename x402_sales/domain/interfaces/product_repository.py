"""Interface for product storage (Repository Pattern)."""
from abc import ABC, abstractmethod
from typing import List, Optional

from x402_sales.domain.entities.product import Product


class IProductRepository(ABC):
    """Interface for storing and retrieving products."""
    
    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        Persist a product.
        
        Args:
            product: Product to store
            
        Returns:
            The stored product
            
        Raises:
            ProductAlreadyExistsError: If another product owns (vendor_id, path)
        """
        pass
    
    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Look up a product by id."""
        pass
    
    @abstractmethod
    def find_by_vendor_id_and_path(self, vendor_id: str, path: str) -> Optional[Product]:
        """
        Look up a product by its address.
        
        Args:
            vendor_id: Owning vendor id
            path: Product path within the vendor
            
        Returns:
            Product if found, None otherwise
        """
        pass
    
    @abstractmethod
    def find_by_vendor_id(self, vendor_id: str) -> List[Product]:
        """List all products of a vendor."""
        pass
