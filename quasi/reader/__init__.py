"""Building expression trees and recognizing the quasiquotation operator shapes."""
